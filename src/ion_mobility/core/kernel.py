"""
Spectral kernel of the screened charge disorder.

    K(alpha) = integral_0^inf  k^4 / (k^2 + 1)^2 * exp(-alpha k^2)  dk

The rational factor is the screened-Coulomb spectral weight (kappa = 1),
the Gaussian is the Debye-Waller damping from the running displacement
variance alpha = Sigma(tau). K is evaluated once per quadrature node of
the tau integral, so it stays a pure leaf function.
"""

import numpy as np

from ion_mobility.core.constants import KAPPA, KERNEL_RTOL, QUAD_LIMIT
from ion_mobility.core.quadrature import integrate


def kernel_integrand(k: float, alpha: float) -> float:
    """Integrand of K(alpha) at wavenumber k."""
    k2 = k * k
    return (k2 * k2 / (k2 + KAPPA**2)**2) * np.exp(-alpha * k2)


def kernel_integral(
    alpha: float,
    epsrel: float = KERNEL_RTOL,
    limit: int = QUAD_LIMIT
) -> float:
    """
    Evaluate K(alpha) by adaptive quadrature on [0, inf).

    The integrand tends to 1 at large k when alpha = 0, so K diverges
    as alpha -> 0+ (like sqrt(pi/alpha)/2). Non-positive alpha returns inf.

    Args:
        alpha: Displacement variance (>= 0)
        epsrel: Relative error target
        limit: Maximum number of adaptive subintervals

    Returns:
        K(alpha) >= 0
    """
    if not alpha > 0.0:
        return np.inf
    return integrate(lambda k: kernel_integrand(k, alpha), 0.0, np.inf, epsrel, limit)
