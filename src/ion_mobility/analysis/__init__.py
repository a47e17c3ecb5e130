"""
Analysis module: parameter sweeps over disorder strength and loop time.
"""

from ion_mobility.analysis.sweep import (
    DisorderSweep,
    sweep_disorder,
    sweep_loop_time,
    format_sweep_table,
    localization_threshold,
)

__all__ = [
    "DisorderSweep",
    "sweep_disorder",
    "sweep_loop_time",
    "format_sweep_table",
    "localization_threshold",
]
