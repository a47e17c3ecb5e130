"""
Unit tests for the screened-disorder kernel K(alpha).

The numerical kernel is checked against its closed form

    K(alpha) = sqrt(pi/alpha)/2 - pi erfcx(sqrt(alpha))
               + (pi/4)(1 - 2 alpha) erfcx(sqrt(alpha)) + sqrt(pi alpha)/2

obtained from k^4/(k^2+1)^2 = 1 - 2/(k^2+1) + 1/(k^2+1)^2.
"""

import pytest
import numpy as np
from numpy.testing import assert_allclose
from scipy.special import erfcx

from ion_mobility.core.kernel import kernel_integral, kernel_integrand


def closed_form_kernel(alpha):
    s = np.sqrt(alpha)
    e = erfcx(s)
    return (0.5 * np.sqrt(np.pi / alpha) - np.pi * e
            + 0.25 * np.pi * (1.0 - 2.0 * alpha) * e + 0.5 * np.sqrt(np.pi * alpha))


@pytest.mark.unit
class TestKernelIntegral:
    """Test suite for kernel_integral."""

    @pytest.mark.parametrize("alpha", [0.01, 0.1, 0.5, 1.0, 2.0, 3.0])
    def test_matches_closed_form(self, alpha):
        """Adaptive quadrature reproduces the erfcx closed form."""
        assert_allclose(kernel_integral(alpha), closed_form_kernel(alpha), rtol=1e-3)

    def test_known_value(self):
        """K(1) = 0.09334 (closed form with erfcx(1) = 0.42758)."""
        assert_allclose(kernel_integral(1.0), 0.09334, rtol=1e-3)

    def test_large_alpha_asymptote(self):
        """For large alpha, K -> 3 sqrt(pi) / (8 alpha^(5/2))."""
        alpha = 400.0
        expected = 3 * np.sqrt(np.pi) / (8 * alpha**2.5)
        assert_allclose(kernel_integral(alpha), expected, rtol=2e-2)

    def test_small_alpha_divergence(self):
        """For small alpha, K ~ sqrt(pi / alpha) / 2."""
        alpha = 1e-4
        leading = 0.5 * np.sqrt(np.pi / alpha)
        assert_allclose(kernel_integral(alpha), leading - 0.75 * np.pi, rtol=1e-2)

    def test_monotonically_decreasing(self):
        """Larger displacement variance means more Debye-Waller damping."""
        alphas = np.array([0.05, 0.2, 0.5, 1.0, 2.0, 5.0, 10.0])
        values = np.array([kernel_integral(a) for a in alphas])

        assert np.all(values > 0)
        assert np.all(np.diff(values) < 0)

    @pytest.mark.parametrize("alpha", [0.0, -1.0, np.nan])
    def test_non_positive_alpha(self, alpha):
        """The integral diverges for alpha <= 0."""
        assert kernel_integral(alpha) == np.inf

    def test_integrand(self):
        """Integrand vanishes at k = 0 and tends to exp(-alpha k^2) at large k."""
        assert kernel_integrand(0.0, 1.0) == 0.0
        assert_allclose(kernel_integrand(1.0, 0.0), 0.25)
        assert_allclose(kernel_integrand(1e3, 1e-6), np.exp(-1.0), rtol=1e-5)

    def test_deterministic(self):
        assert kernel_integral(0.7) == kernel_integral(0.7)
