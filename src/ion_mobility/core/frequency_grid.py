"""
Matsubara-like frequency grid for a closed path of loop time T.

    Omega_m = 2 pi m / T,          m = 0, 1, ..., N
    A0_m    = (T / 2D) Omega_m^2   (bare kinetic action coefficient)

Index 0 is the zero mode; it is kept so that array index equals mode
number, but it never enters the physical sums.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ion_mobility.core.constants import D_BARE


@dataclass(frozen=True)
class FrequencyGrid:
    """Mode frequencies and bare action coefficients for one solver call."""
    omega: NDArray
    bare_action: NDArray
    n_modes: int
    loop_time: float

    @property
    def first_frequency(self) -> float:
        """Omega_1, the lowest non-zero frequency."""
        return float(self.omega[1])


def build_frequency_grid(n_modes: int, loop_time: float) -> FrequencyGrid:
    """
    Build the frequency grid for N modes and loop time T.

    Args:
        n_modes: Number of non-zero modes N (>= 1)
        loop_time: Dimensionless loop time T (> 0)

    Returns:
        FrequencyGrid with arrays of length N + 1
    """
    if int(n_modes) != n_modes or n_modes < 1:
        raise ValueError(f"n_modes must be a positive integer, got {n_modes}")
    if not np.isfinite(loop_time) or loop_time <= 0:
        raise ValueError(f"loop_time must be positive, got {loop_time}")

    n_modes = int(n_modes)
    loop_time = float(loop_time)

    m = np.arange(n_modes + 1, dtype=float)
    omega = 2.0 * np.pi * m / loop_time
    bare_action = (loop_time / (2.0 * D_BARE)) * omega**2

    omega.setflags(write=False)
    bare_action.setflags(write=False)

    return FrequencyGrid(
        omega=omega,
        bare_action=bare_action,
        n_modes=n_modes,
        loop_time=loop_time
    )
