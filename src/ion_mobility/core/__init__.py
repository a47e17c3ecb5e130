"""
Core module for the ion mobility solver.

Contains unit constants, the frequency grid, the disorder kernel, the
shared quadrature wrappers and the self-consistent solver.

Main interface:
- solve: D_eff/D for one disorder strength
- ChakrabortySCPTSolver: solver with configurable tolerances
"""

from ion_mobility.core.constants import (
    D_BARE,
    KAPPA,
    BETA,
    DEFAULT_N_MODES,
    DEFAULT_LOOP_TIME,
    DEFAULT_MAXITER,
)
from ion_mobility.core.frequency_grid import FrequencyGrid, build_frequency_grid
from ion_mobility.core.kernel import kernel_integral, kernel_integrand
from ion_mobility.core.observable import extract_diffusivity_ratio, zero_frequency_memory
from ion_mobility.core.scpt_solver import (
    ChakrabortySCPTSolver,
    SCPTResult,
    SolverStatus,
    solve,
    solve_detailed,
)

__all__ = [
    # Constants
    "D_BARE",
    "KAPPA",
    "BETA",
    "DEFAULT_N_MODES",
    "DEFAULT_LOOP_TIME",
    "DEFAULT_MAXITER",
    # Building blocks
    "FrequencyGrid",
    "build_frequency_grid",
    "kernel_integral",
    "kernel_integrand",
    "extract_diffusivity_ratio",
    "zero_frequency_memory",
    # Solver
    "ChakrabortySCPTSolver",
    "SCPTResult",
    "SolverStatus",
    "solve",
    "solve_detailed",
]
