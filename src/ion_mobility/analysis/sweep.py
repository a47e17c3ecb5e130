"""
Parameter sweeps for D_eff/D.

Each point is an independent call to the solver (fresh grid, fresh gamma),
run sequentially in the order given. Results are kept in that order so they
can be plotted directly as curves.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray
from tabulate import tabulate

from ion_mobility.core.constants import DEFAULT_N_MODES, DEFAULT_LOOP_TIME, DEFAULT_MAXITER
from ion_mobility.core.scpt_solver import SolverStatus, solve_detailed


@dataclass
class DisorderSweep:
    """D_eff/D along an ordered sequence of disorder strengths at fixed T."""
    disorder_values: NDArray
    d_eff_ratios: NDArray
    statuses: List[SolverStatus]
    iterations: List[int]
    n_modes: int
    loop_time: float
    maxiter: int

    def __len__(self) -> int:
        return len(self.disorder_values)

    @property
    def all_converged(self) -> bool:
        return all(status is not SolverStatus.NOT_CONVERGED for status in self.statuses)


def sweep_disorder(
    disorder_values: Sequence[float],
    n_modes: int = DEFAULT_N_MODES,
    loop_time: float = DEFAULT_LOOP_TIME,
    maxiter: int = DEFAULT_MAXITER,
    integration_scheme: str = 'per_mode',
    verbose: bool = False
) -> DisorderSweep:
    """
    Solve for D_eff/D at every disorder strength.

    Args:
        disorder_values: Ordered lambda*kappa values
        n_modes: Number of Fourier modes N
        loop_time: Dimensionless loop time T
        maxiter: Maximum self-consistent iterations per point
        integration_scheme: Passed to the solver
        verbose: Print one line per point

    Returns:
        DisorderSweep in the order of disorder_values
    """
    disorder_values = np.asarray(disorder_values, dtype=float)
    ratios = np.zeros(len(disorder_values))
    statuses = []
    iterations = []

    for i, lk in enumerate(disorder_values):
        result = solve_detailed(
            lk,
            N=n_modes,
            T=loop_time,
            maxiter=maxiter,
            integration_scheme=integration_scheme
        )
        ratios[i] = result.d_eff_ratio
        statuses.append(result.status)
        iterations.append(result.iterations)

        if verbose:
            print(f"  lambda*kappa = {lk:.3f}: D_eff/D = {result.d_eff_ratio:.6f} "
                  f"({result.status.value}, {result.iterations} iterations)")

    return DisorderSweep(
        disorder_values=disorder_values,
        d_eff_ratios=ratios,
        statuses=statuses,
        iterations=iterations,
        n_modes=n_modes,
        loop_time=loop_time,
        maxiter=maxiter
    )


def sweep_loop_time(
    disorder_values: Sequence[float],
    loop_times: Sequence[float],
    n_modes: int = DEFAULT_N_MODES,
    maxiter: int = DEFAULT_MAXITER,
    integration_scheme: str = 'per_mode',
    verbose: bool = False
) -> Dict[float, DisorderSweep]:
    """
    One disorder sweep per loop time.

    Returns:
        Dict mapping each loop time (in the given order) to its sweep
    """
    sweeps = {}
    for loop_time in loop_times:
        if verbose:
            print(f"\n=== Loop time T = {loop_time:g} ===")
        sweeps[loop_time] = sweep_disorder(
            disorder_values,
            n_modes=n_modes,
            loop_time=loop_time,
            maxiter=maxiter,
            integration_scheme=integration_scheme,
            verbose=verbose
        )
    return sweeps


def localization_threshold(sweep: DisorderSweep) -> Optional[float]:
    """
    First disorder strength at which the ion is localized.

    Returns None if no point of the sweep is localized.
    """
    for lk, ratio, status in zip(sweep.disorder_values, sweep.d_eff_ratios, sweep.statuses):
        if status is SolverStatus.LOCALIZED or ratio == 0.0:
            return float(lk)
    return None


def format_sweep_table(sweep: DisorderSweep, tablefmt: str = 'grid') -> str:
    """Render a sweep as a text table."""
    headers = ["lambda*kappa", "D_eff/D", "Status", "Iterations"]
    table_data = [
        [f"{lk:.3f}", f"{ratio:.6f}", status.value, n_iter]
        for lk, ratio, status, n_iter in zip(
            sweep.disorder_values, sweep.d_eff_ratios, sweep.statuses, sweep.iterations
        )
    ]
    title = f"N = {sweep.n_modes}, T = {sweep.loop_time:g}, maxiter = {sweep.maxiter}"
    return title + "\n" + tabulate(table_data, headers=headers, tablefmt=tablefmt,
                                    disable_numparse=True)
