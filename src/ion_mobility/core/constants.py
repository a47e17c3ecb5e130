"""
Constants for the ion mobility solver.

Internal units are dimensionless: the bare diffusion constant D, the
inverse screening length kappa and the inverse temperature beta are all 1.

Numerical controls for the self-consistent iteration (tolerances, mixing,
thresholds, quadrature budget) are loaded from constants.json if available,
otherwise default values are used.
"""

import json
from pathlib import Path
from typing import Dict, Any

# =============================================================================
# Load Numerical Controls from JSON
# =============================================================================

# Path to constants.json (same directory as this file)
_CONSTANTS_JSON_PATH = Path(__file__).parent / "constants.json"

# Default values (used if constants.json is missing)
_DEFAULT_CONSTANTS: Dict[str, Any] = {
    "default_n_modes": 10,  # Fourier modes in the path discretization
    "default_loop_time": 100.0,  # dimensionless loop time T
    "default_maxiter": 200,  # self-consistent iterations
    "mixing": 0.3,  # damping of the Picard update
    "convergence_tol": 1e-5,  # relative change in gamma
    "collapse_threshold": 1e-12,  # smallest admissible A0_m + gamma_m
    "gamma_sanity_bound": 1e5,  # gamma_1 above this is treated as localized
    "kernel_rtol": 1e-4,  # relative tolerance of K(alpha)
    "time_rtol": 1e-3,  # relative tolerance of the tau integral
    "quad_limit": 200,  # max adaptive subintervals per integral
    "norm_regularizer": 1e-10,  # keeps the relative change finite at gamma=0
}


def load_constants_from_json(path: Path = None) -> Dict[str, Any]:
    """
    Read the solver's numerical controls.

    Recognised keys are those of _DEFAULT_CONSTANTS: the default
    discretization (default_n_modes, default_loop_time, default_maxiter),
    the iteration controls (mixing, convergence_tol, collapse_threshold,
    gamma_sanity_bound, norm_regularizer) and the quadrature controls
    (kernel_rtol, time_rtol, quad_limit). Keys missing from the file keep
    their defaults; unrecognised keys are reported and dropped. A missing
    or unreadable file gives the defaults.

    Args:
        path: JSON file to read (default: constants.json beside this module)

    Returns:
        Complete dict of numerical controls
    """
    json_path = Path(path) if path is not None else _CONSTANTS_JSON_PATH
    controls = _DEFAULT_CONSTANTS.copy()
    if not json_path.exists():
        return controls

    try:
        with open(json_path, 'r', encoding='utf-8') as f:
            overrides = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        print(f"Warning: Failed to load {json_path.name}: {e}. Using defaults.")
        return controls

    unknown = sorted(set(overrides) - set(controls))
    if unknown:
        print(f"Warning: Ignoring unknown keys in {json_path.name}: {', '.join(unknown)}")
    controls.update({key: value for key, value in overrides.items() if key in controls})
    return controls


def save_constants_to_json(constants: Dict[str, Any], path: Path = None) -> None:
    """
    Write numerical-control overrides, e.g. a tighter convergence_tol or a
    larger quad_limit for a production sweep.

    Only the given keys are written; everything else falls back to the
    defaults when the file is read back.

    Args:
        constants: Overrides keyed as in _DEFAULT_CONSTANTS
        path: JSON file to write (default: constants.json beside this module)
    """
    json_path = Path(path) if path is not None else _CONSTANTS_JSON_PATH
    with open(json_path, 'w', encoding='utf-8') as f:
        json.dump(constants, f, indent=4)


def get_constants_json_path() -> Path:
    """Location of the override file read at import time."""
    return _CONSTANTS_JSON_PATH


# Load constants at module import time
_LOADED_CONSTANTS = load_constants_from_json()

# =============================================================================
# Physical Units (fixed)
# =============================================================================

# Bare diffusion constant of the ion
D_BARE: float = 1.0

# Inverse Debye screening length
KAPPA: float = 1.0

# Inverse temperature 1/(k_B T)
BETA: float = 1.0

# =============================================================================
# Path Discretization Defaults
# =============================================================================

DEFAULT_N_MODES: int = int(_LOADED_CONSTANTS["default_n_modes"])

DEFAULT_LOOP_TIME: float = float(_LOADED_CONSTANTS["default_loop_time"])

DEFAULT_MAXITER: int = int(_LOADED_CONSTANTS["default_maxiter"])

# =============================================================================
# Self-Consistent Iteration Controls
# =============================================================================
# The undamped map gamma -> Gamma(gamma) is only weakly contractive near the
# localization transition (lambda*kappa ~ 1), so updates are mixed:
#     gamma <- (1 - MIXING) * gamma_old + MIXING * gamma_new
# =============================================================================
MIXING: float = float(_LOADED_CONSTANTS["mixing"])

CONVERGENCE_TOL: float = float(_LOADED_CONSTANTS["convergence_tol"])

# A0_m + gamma_m below this means the propagator denominator has collapsed
COLLAPSE_THRESHOLD: float = float(_LOADED_CONSTANTS["collapse_threshold"])

# gamma_1 above this (or non-finite) means the ion is trapped
GAMMA_SANITY_BOUND: float = float(_LOADED_CONSTANTS["gamma_sanity_bound"])

NORM_REGULARIZER: float = float(_LOADED_CONSTANTS["norm_regularizer"])

# =============================================================================
# Quadrature Controls
# =============================================================================

KERNEL_RTOL: float = float(_LOADED_CONSTANTS["kernel_rtol"])

TIME_RTOL: float = float(_LOADED_CONSTANTS["time_rtol"])

QUAD_LIMIT: int = int(_LOADED_CONSTANTS["quad_limit"])
