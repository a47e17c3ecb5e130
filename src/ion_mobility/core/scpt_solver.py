"""
Self-consistent perturbation theory for ion diffusion in quenched disorder.

Chakraborty, Bratko & Chandler, J. Chem. Phys. 100, 1528 (1994).

The closed path of the ion over loop time T is expanded in N Fourier
modes. Each mode carries a variational parameter gamma_m (the memory
kernel in frequency space), fixed by the self-consistency condition

    gamma_m = lambda*kappa * integral_0^{T/2} (1 - cos Omega_m tau) K(Sigma(tau)) dtau

    Sigma(tau) = sum_{m=1}^{N} (1 - cos Omega_m tau) / (A0_m + gamma_m)

where K is the screened-disorder kernel (kernel.py). The condition is
solved by damped Picard iteration starting from gamma = 0. The tau
integral stops at T/2 to stay clear of the periodicity point tau = T.

Terminal states:
    CONVERGED      relative change below tolerance
    LOCALIZED      a propagator denominator collapsed or gamma ran away;
                   D_eff/D = 0
    NOT_CONVERGED  maxiter reached; best-effort gamma is used and a
                   warning is issued
"""

import warnings
from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import NDArray

from ion_mobility.core.constants import (
    DEFAULT_N_MODES,
    DEFAULT_LOOP_TIME,
    DEFAULT_MAXITER,
    MIXING,
    CONVERGENCE_TOL,
    COLLAPSE_THRESHOLD,
    GAMMA_SANITY_BOUND,
    NORM_REGULARIZER,
    KERNEL_RTOL,
    TIME_RTOL,
    QUAD_LIMIT,
)
from ion_mobility.core.frequency_grid import FrequencyGrid, build_frequency_grid
from ion_mobility.core.kernel import kernel_integral
from ion_mobility.core.observable import extract_diffusivity_ratio
from ion_mobility.core.quadrature import integrate, integrate_vector


INTEGRATION_SCHEMES = ('per_mode', 'vectorized')


class SolverStatus(Enum):
    """How the self-consistent iteration terminated."""
    CONVERGED = 'converged'
    LOCALIZED = 'localized'
    NOT_CONVERGED = 'not_converged'


@dataclass
class SCPTResult:
    """
    Result from the self-consistent solver.

    d_eff_ratio is the only physical output; the remaining fields describe
    how it was obtained.
    """
    d_eff_ratio: float
    status: SolverStatus
    iterations: int
    rel_change: float
    gamma: NDArray
    grid: FrequencyGrid
    disorder_strength: float

    @property
    def converged(self) -> bool:
        return self.status is SolverStatus.CONVERGED

    @property
    def localized(self) -> bool:
        return self.status is SolverStatus.LOCALIZED


class ChakrabortySCPTSolver:
    """
    Damped fixed-point solver for the variational parameters gamma_m.

    Usage:
        solver = ChakrabortySCPTSolver(n_modes=10, loop_time=100.0)
        result = solver.solve(0.3)
        print(result.d_eff_ratio, result.status)
    """

    def __init__(
        self,
        n_modes: int = DEFAULT_N_MODES,
        loop_time: float = DEFAULT_LOOP_TIME,
        maxiter: int = DEFAULT_MAXITER,
        mixing: float = MIXING,
        tol: float = CONVERGENCE_TOL,
        collapse_threshold: float = COLLAPSE_THRESHOLD,
        sanity_bound: float = GAMMA_SANITY_BOUND,
        kernel_rtol: float = KERNEL_RTOL,
        time_rtol: float = TIME_RTOL,
        quad_limit: int = QUAD_LIMIT,
        integration_scheme: str = 'per_mode',
        verbose: bool = False
    ):
        """
        Initialize the solver.

        Args:
            n_modes: Number of Fourier modes N
            loop_time: Dimensionless loop time T (larger -> better
                low-frequency resolution)
            maxiter: Maximum self-consistent iterations
            mixing: Weight of the new iterate in the damped update
            tol: Relative change in gamma that counts as converged
            collapse_threshold: Smallest admissible A0_m + gamma_m
            sanity_bound: gamma_1 above this is treated as localized
            kernel_rtol: Relative tolerance of K(alpha)
            time_rtol: Relative tolerance of the tau integral
            quad_limit: Maximum adaptive subintervals per integral
            integration_scheme: 'per_mode' integrates each mode separately;
                'vectorized' integrates all modes at once, sharing each
                kernel evaluation
            verbose: Print diagnostic information
        """
        if int(maxiter) != maxiter or maxiter < 1:
            raise ValueError(f"maxiter must be a positive integer, got {maxiter}")
        if not 0.0 < mixing <= 1.0:
            raise ValueError(f"mixing must be in (0, 1], got {mixing}")
        if integration_scheme not in INTEGRATION_SCHEMES:
            raise ValueError(
                f"integration_scheme must be one of {INTEGRATION_SCHEMES}, "
                f"got {integration_scheme!r}"
            )

        self.grid = build_frequency_grid(n_modes, loop_time)
        self.maxiter = int(maxiter)
        self.mixing = mixing
        self.tol = tol
        self.collapse_threshold = collapse_threshold
        self.sanity_bound = sanity_bound
        self.kernel_rtol = kernel_rtol
        self.time_rtol = time_rtol
        self.quad_limit = quad_limit
        self.integration_scheme = integration_scheme
        self.verbose = verbose

        if self.verbose:
            print("=== ChakrabortySCPTSolver Initialized ===")
            print(f"  N modes: {self.grid.n_modes}")
            print(f"  Loop time T: {self.grid.loop_time:.3f}")
            print(f"  Omega_1: {self.grid.first_frequency:.6f}")
            print(f"  Max iterations: {self.maxiter}, Tolerance: {self.tol:.1e}")
            print(f"  Mixing: {self.mixing}, Scheme: {self.integration_scheme}")

    def _kernel(self, alpha: float) -> float:
        return kernel_integral(alpha, epsrel=self.kernel_rtol, limit=self.quad_limit)

    def _update_gamma(self, disorder_strength: float, denominators: NDArray) -> NDArray:
        """
        One application of the self-consistency map.

        Args:
            disorder_strength: lambda*kappa
            denominators: A0_m + gamma_m for m = 1..N

        Returns:
            New gamma, length N + 1 with gamma[0] = 0
        """
        omega = self.grid.omega[1:]
        t_half = self.grid.loop_time / 2.0

        # 1 - cos(x) = 2 sin^2(x/2), accurate at small tau
        def one_minus_cos(tau):
            return 2.0 * np.sin(0.5 * omega * tau)**2

        def sigma(tau):
            return float(np.sum(one_minus_cos(tau) / denominators))

        gamma_new = np.zeros(self.grid.n_modes + 1)

        if self.integration_scheme == 'vectorized':
            def integrand(tau):
                return one_minus_cos(tau) * self._kernel(sigma(tau))

            gamma_new[1:] = disorder_strength * integrate_vector(
                integrand, 0.0, t_half, self.time_rtol, self.quad_limit
            )
        else:
            for m in range(1, self.grid.n_modes + 1):
                half_omega = 0.5 * self.grid.omega[m]

                def integrand(tau, half_omega=half_omega):
                    return 2.0 * np.sin(half_omega * tau)**2 * self._kernel(sigma(tau))

                gamma_new[m] = disorder_strength * integrate(
                    integrand, 0.0, t_half, self.time_rtol, self.quad_limit
                )

        return gamma_new

    def _result(
        self,
        disorder_strength: float,
        gamma: NDArray,
        status: SolverStatus,
        iterations: int,
        rel_change: float
    ) -> SCPTResult:
        if status is SolverStatus.LOCALIZED:
            d_eff_ratio = 0.0
        else:
            d_eff_ratio = extract_diffusivity_ratio(gamma, self.grid, self.sanity_bound)

        if self.verbose:
            print(f"  Status: {status.value.upper()} after {iterations} iterations")
            print(f"  D_eff/D = {d_eff_ratio:.6f}")

        return SCPTResult(
            d_eff_ratio=d_eff_ratio,
            status=status,
            iterations=iterations,
            rel_change=rel_change,
            gamma=gamma,
            grid=self.grid,
            disorder_strength=disorder_strength
        )

    def solve(self, disorder_strength: float) -> SCPTResult:
        """
        Iterate the self-consistency condition to a fixed point.

        Args:
            disorder_strength: lambda*kappa (>= 0); the ion localizes
                around lambda*kappa ~ 1

        Returns:
            SCPTResult with D_eff/D in [0, 1]
        """
        if self.verbose:
            print(f"\n=== Solving SCPT (lambda*kappa = {disorder_strength:.4f}) ===")

        # Initial guess: no disorder-induced memory
        gamma = np.zeros(self.grid.n_modes + 1)
        rel_change = np.inf

        for iteration in range(1, self.maxiter + 1):
            gamma_old = gamma.copy()

            # Propagator denominators A0_m + gamma_m
            denominators = self.grid.bare_action[1:] + gamma_old[1:]

            # Vanishing denominator: the ion is trapped
            if np.any(denominators < self.collapse_threshold):
                if self.verbose:
                    print(f"  Denominator collapse at iteration {iteration}")
                return self._result(
                    disorder_strength, gamma_old, SolverStatus.LOCALIZED, iteration, rel_change
                )

            gamma_new = self._update_gamma(disorder_strength, denominators)

            if not np.all(np.isfinite(gamma_new)) or gamma_new[1] > self.sanity_bound:
                if self.verbose:
                    print(f"  Runaway gamma_1 = {gamma_new[1]:.3e} at iteration {iteration}")
                return self._result(
                    disorder_strength, gamma_new, SolverStatus.LOCALIZED, iteration, rel_change
                )

            delta = np.linalg.norm(gamma_new[1:] - gamma_old[1:])
            rel_change = float(delta / (np.linalg.norm(gamma_new[1:]) + NORM_REGULARIZER))

            if self.verbose and (iteration == 1 or iteration % 10 == 0):
                print(f"  Iteration {iteration}: rel_change = {rel_change:.3e}, "
                      f"gamma_1 = {gamma_new[1]:.6e}")

            if rel_change < self.tol:
                return self._result(
                    disorder_strength, gamma_new, SolverStatus.CONVERGED, iteration, rel_change
                )

            # Damped update for stability
            gamma = (1.0 - self.mixing) * gamma_old + self.mixing * gamma_new

        warnings.warn(f"max iterations reached (rel_Δ = {rel_change:.2e})")
        return self._result(
            disorder_strength, gamma, SolverStatus.NOT_CONVERGED, self.maxiter, rel_change
        )


def solve_detailed(
    disorder_strength: float,
    N: int = DEFAULT_N_MODES,
    T: float = DEFAULT_LOOP_TIME,
    maxiter: int = DEFAULT_MAXITER,
    integration_scheme: str = 'per_mode',
    verbose: bool = False
) -> SCPTResult:
    """Solve for one disorder strength and return the full SCPTResult."""
    solver = ChakrabortySCPTSolver(
        n_modes=N,
        loop_time=T,
        maxiter=maxiter,
        integration_scheme=integration_scheme,
        verbose=verbose
    )
    return solver.solve(disorder_strength)


def solve(
    disorder_strength: float,
    N: int = DEFAULT_N_MODES,
    T: float = DEFAULT_LOOP_TIME,
    maxiter: int = DEFAULT_MAXITER,
    integration_scheme: str = 'per_mode'
) -> float:
    """
    Effective diffusivity ratio D_eff/D for disorder strength lambda*kappa.

    Args:
        disorder_strength: lambda*kappa (dimensionless)
        N: Number of Fourier modes in the path discretization
        T: Dimensionless loop time
        maxiter: Maximum self-consistent iterations
        integration_scheme: 'per_mode' (default) or 'vectorized'

    Returns:
        D_eff/D in [0, 1]; 0.0 in the localized phase
    """
    result = solve_detailed(
        disorder_strength,
        N=N,
        T=T,
        maxiter=maxiter,
        integration_scheme=integration_scheme
    )
    return result.d_eff_ratio
