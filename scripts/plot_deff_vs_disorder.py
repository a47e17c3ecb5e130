"""
Effective diffusivity vs disorder strength (Chakraborty, Bratko & Chandler, Fig. 4).

Sweeps lambda*kappa at one or more loop times, prints the results as a
table and saves the curves as PNG and PDF.
"""

import argparse

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from ion_mobility.analysis.sweep import (
    sweep_loop_time,
    format_sweep_table,
    localization_threshold,
)
from ion_mobility.core.constants import DEFAULT_N_MODES, DEFAULT_LOOP_TIME, DEFAULT_MAXITER


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plot D_eff/D against disorder strength lambda*kappa",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python plot_deff_vs_disorder.py                               # default N and T
  python plot_deff_vs_disorder.py --loop-time 50                # single curve at T = 50
  python plot_deff_vs_disorder.py --loop-time 50 --loop-times 100 200
  python plot_deff_vs_disorder.py --output fig4 --vectorized
"""
    )
    parser.add_argument("--n-modes", type=int, default=DEFAULT_N_MODES, help="Fourier modes N")
    parser.add_argument("--loop-time", type=float, default=DEFAULT_LOOP_TIME,
                        help="Loop time T of the main curve")
    parser.add_argument("--loop-times", type=float, nargs="+", default=None,
                        help="Extra loop times, one curve each")
    parser.add_argument("--maxiter", type=int, default=DEFAULT_MAXITER,
                        help="Max SCPT iterations")
    parser.add_argument("--lk-min", type=float, default=0.01)
    parser.add_argument("--lk-max", type=float, default=1.5)
    parser.add_argument("--lk-step", type=float, default=0.05)
    parser.add_argument("--vectorized", action="store_true",
                        help="Integrate all modes at once (faster)")
    parser.add_argument("--output", default="Chakraborty-Fig4-Deff",
                        help="Output file stem (.png and .pdf are written)")
    return parser


def collect_loop_times(args: argparse.Namespace) -> list:
    """Main loop time first, then the extras, without repeats."""
    loop_times = [args.loop_time] + list(args.loop_times or [])
    return list(dict.fromkeys(loop_times))


def main(argv=None):
    args = build_parser().parse_args(argv)

    chi_values = np.arange(args.lk_min, args.lk_max, args.lk_step)
    scheme = 'vectorized' if args.vectorized else 'per_mode'

    print("=" * 80)
    print("EFFECTIVE DIFFUSIVITY VS DISORDER STRENGTH")
    print("=" * 80)

    sweeps = sweep_loop_time(
        chi_values,
        collect_loop_times(args),
        n_modes=args.n_modes,
        maxiter=args.maxiter,
        integration_scheme=scheme,
        verbose=True
    )

    fig, ax = plt.subplots(figsize=(8, 6))
    for loop_time, sweep in sweeps.items():
        print()
        print(format_sweep_table(sweep))
        threshold = localization_threshold(sweep)
        if threshold is not None:
            print(f"Localized from lambda*kappa = {threshold:.3f}")

        label = "D$_{eff}$/D" if len(sweeps) == 1 else f"T = {loop_time:g}"
        ax.plot(sweep.disorder_values, sweep.d_eff_ratios, label=label)

    ax.set_xlabel(r"$\lambda_D \kappa$")
    ax.set_ylabel(r"D$_{eff}$/D")
    ax.set_title("Effective Diffusivity vs Disorder Strength")
    ax.grid(True)
    ax.legend(loc="upper right")

    for ext in ("png", "pdf"):
        path = f"{args.output}.{ext}"
        fig.savefig(path, dpi=150, bbox_inches="tight")
        print(f"Plot saved to {path}")


if __name__ == "__main__":
    main()
