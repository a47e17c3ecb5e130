"""
Adaptive quadrature shared by the kernel and the self-consistent update.

Thin wrappers around scipy.integrate.quad (scalar integrands, finite or
semi-infinite intervals) and scipy.integrate.quad_vec (vector-valued
integrands on finite intervals). Both:

    - control the error by a relative tolerance only
    - bound the work by a maximum number of adaptive subintervals
    - return the best estimate when the tolerance cannot be met, instead
      of raising or warning
"""

import warnings
from typing import Callable

import numpy as np
from numpy.typing import NDArray
from scipy.integrate import quad, quad_vec, IntegrationWarning

from ion_mobility.core.constants import QUAD_LIMIT


def integrate(
    f: Callable[[float], float],
    a: float,
    b: float,
    epsrel: float,
    limit: int = QUAD_LIMIT
) -> float:
    """
    Integrate a scalar function over [a, b].

    Args:
        f: Integrand f(x) -> float
        a: Lower limit
        b: Upper limit, may be np.inf
        epsrel: Relative error target
        limit: Maximum number of adaptive subintervals

    Returns:
        Best estimate of the integral
    """
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", IntegrationWarning)
        value, _ = quad(f, a, b, epsabs=0.0, epsrel=epsrel, limit=limit)
    return value


def integrate_vector(
    f: Callable[[float], NDArray],
    a: float,
    b: float,
    epsrel: float,
    limit: int = QUAD_LIMIT
) -> NDArray:
    """
    Integrate a vector-valued function over the finite interval [a, b].

    The error is controlled in the 2-norm over components, so every
    component shares the same adaptive subdivision.

    Args:
        f: Integrand f(x) -> array of shape (n,)
        a: Lower limit
        b: Upper limit
        epsrel: Relative error target (w.r.t. the norm of the result)
        limit: Maximum number of adaptive subintervals

    Returns:
        Array of shape (n,) with the best estimate of each component
    """
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", IntegrationWarning)
        value, _ = quad_vec(f, a, b, epsrel=epsrel, norm='2', limit=limit)
    return np.asarray(value, dtype=float)
