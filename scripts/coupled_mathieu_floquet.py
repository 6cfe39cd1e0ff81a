"""
Floquet analysis of two coupled Mathieu oscillators

    x'' + (1 + a cos 2t) x = x - y
    y'' + (1 + a cos 2t) y = y - x

rewritten as a 4-dimensional first-order system with period T = pi. Prints the
Floquet exponents and multipliers, the number of Fourier coefficients of the
periodic factor P(t), and plots x(t) = P(t) exp(tB) x0 over several periods.
"""

from __future__ import annotations

import argparse
from pathlib import Path
import numpy as np
import matplotlib.pyplot as plt

import floqdyn

DEFAULT_OUTPUT = Path("coupled_mathieu_floquet.svg")


def parse_args():
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--a", type=float, default=floqdyn.COUPLING_AMPLITUDE, help="Modulation amplitude.")
    parser.add_argument("--n-periods", type=int, default=floqdyn.N_PERIODS_TO_PLOT, help="Periods to propagate.")
    parser.add_argument("--n-nodes", type=int, default=floqdyn.N_CHEBYSHEV_NODES, help="Chebyshev collocation nodes.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random initial condition.")
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT, help="SVG file for the plot.")
    parser.add_argument("--show", action="store_true", help="Open the plot window.")
    return parser.parse_args()


def main():
    args = parse_args()

    SYSTEM = floqdyn.CoupledMathieuSystem(a=args.a, period=floqdyn.PERIOD)
    SOLVER = floqdyn.ChebyshevCollocationSolver(n_nodes=args.n_nodes, verbose=True)
    PRECISION = floqdyn.Precision.DOUBLE

    result = floqdyn.floquet_analysis(
        system=SYSTEM,
        solver=SOLVER,
        precision=PRECISION,
    )

    print("Phi(0) =")
    print(np.array2string(np.asarray(result.fundamental.left), precision=6, suppress_small=True))
    print("Phi(T) =")
    print(np.array2string(np.asarray(result.monodromy), precision=6, suppress_small=True))

    x0 = floqdyn.random_initial_condition(SYSTEM.n_states, seed=args.seed)
    print(f"x0 = {np.asarray(x0)}")

    trajectory = result.propagate(x0, n_periods=args.n_periods, verbose=True)

    floqdyn.plot_trajectory(
        trajectory,
        labels=["x", "y", "dx/dt", "dy/dt"],
        period=SYSTEM.period,
        title=f"Coupled Mathieu oscillators, a = {args.a:g}",
        path=args.output,
    )
    print(f"Saved plot to {args.output}")

    if args.show:
        plt.show()


if __name__ == "__main__":
    main()
