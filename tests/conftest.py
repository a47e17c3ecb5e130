"""
Pytest configuration for the ion mobility test suite.
"""

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))


def pytest_configure(config):
    """Called after command line options have been parsed."""
    # Add markers for test organization
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


@pytest.fixture
def default_settings():
    """Discretization used by the published figure."""
    return {
        'N': 10,
        'T': 100.0,
        'maxiter': 200,
    }


@pytest.fixture
def small_settings():
    """Coarse discretization for fast solver tests."""
    return {
        'N': 3,
        'T': 20.0,
        'maxiter': 150,
        'integration_scheme': 'vectorized',
    }
