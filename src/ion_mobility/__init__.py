"""
Ion Mobility - diffusion of an ion through quenched charged disorder

Self-consistent perturbation theory (SCPT) of Chakraborty, Bratko and
Chandler (J. Chem. Phys. 100, 1994) for the effective diffusivity D_eff/D
as a function of the disorder strength lambda*kappa.

Main Interface:
    from ion_mobility import solve

    d_ratio = solve(0.3, N=10, T=100.0)
    print(f"D_eff/D = {d_ratio:.4f}")

Components:
- solve / solve_detailed: single disorder strength
- ChakrabortySCPTSolver: solver class with configurable tolerances
- sweep_disorder / sweep_loop_time: ordered parameter sweeps
"""

from ion_mobility.core import (
    ChakrabortySCPTSolver,
    SCPTResult,
    SolverStatus,
    solve,
    solve_detailed,
)
from ion_mobility.analysis import (
    DisorderSweep,
    sweep_disorder,
    sweep_loop_time,
    format_sweep_table,
    localization_threshold,
)

__version__ = "0.1.0"

__all__ = [
    "ChakrabortySCPTSolver",
    "SCPTResult",
    "SolverStatus",
    "solve",
    "solve_detailed",
    "DisorderSweep",
    "sweep_disorder",
    "sweep_loop_time",
    "format_sweep_table",
    "localization_threshold",
]
