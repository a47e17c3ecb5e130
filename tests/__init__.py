"""
Ion Mobility Test Suite.

Unit and integration tests for the SCPT solver:
- test_frequency_grid.py: Mode frequencies and bare action
- test_kernel.py: Screened-disorder kernel K(alpha)
- test_quadrature.py: Shared adaptive quadrature
- test_observable.py: D_eff/D extraction
- test_scpt_solver.py: Self-consistent iteration and solve()
- test_sweep.py: Disorder / loop-time sweeps
- test_constants.py: Constants and JSON overrides
- test_plot_script.py: Figure script command line

Run fast tests only with: pytest -m "not slow"
"""
