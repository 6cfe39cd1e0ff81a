from __future__ import annotations
import time
import jax
import jax.numpy as jnp

from .system.abstract_system import AbstractPeriodicSystem
from .solver.abstract_solver import AbstractSolver
from .solver.chebyshev_collocation_solver import ChebyshevCollocationSolver
from .floquet import FloquetDecomposition, PeriodicFactor, liouville_determinant
from .periodicity import PeriodicityReport, periodicity_check
from .propagation import Trajectory, propagate, time_grid
from . import constants as const

class FloquetResult:
    def __init__(
        self,
        system: AbstractPeriodicSystem,
        decomposition: FloquetDecomposition,
        periodic_factor: PeriodicFactor,
        periodicity: PeriodicityReport,
    ):
        self.system = system
        self.decomposition = decomposition
        self.periodic_factor = periodic_factor
        self.periodicity = periodicity

    @property
    def fundamental(self):
        return self.decomposition.fundamental

    @property
    def exponents(self):
        return self.decomposition.exponents

    @property
    def multipliers(self):
        return self.decomposition.multipliers

    @property
    def monodromy(self):
        return self.decomposition.monodromy

    def propagate(self, x0, n_periods: int = const.N_PERIODS_TO_PLOT,
                  n_points_per_period: int = const.N_POINTS_PER_PERIOD, verbose: bool = False) -> Trajectory:
        ts = time_grid(self.system.period, n_periods, n_points_per_period)
        return propagate(self.decomposition, x0, ts, periodic_factor=self.periodic_factor, verbose=verbose)

def floquet_analysis(
    system: AbstractPeriodicSystem,
    solver: AbstractSolver = None,
    precision: const.Precision = const.Precision.DOUBLE,
    n_periods: int = 1,
    verbose: bool = True,
) -> FloquetResult:
    """Floquet decomposition Phi(t) = P(t) exp(tB) of a linear periodic system.

    Args:
        system: The periodic system x' = A(t) x.
        solver: Solver for the fundamental matrix. Defaults to Chebyshev collocation.
        precision: The numerical precision to use.
        n_periods: Number of periods the fundamental matrix is solved over; the
            periodicity check samples all of them.
        verbose: Print timing, Floquet exponents and multipliers.

    Returns:
        A FloquetResult holding the decomposition, the periodic factor P and the
        periodicity report.
    """

    if precision == const.Precision.DOUBLE:
        jax.config.update("jax_enable_x64", True)
    elif precision == const.Precision.SINGLE:
        jax.config.update("jax_enable_x64", False)
    else:
        raise ValueError(f"Unsupported precision: {precision}")

    if solver is None:
        solver = ChebyshevCollocationSolver()

    if verbose:
        print("Floquet analysis: ", system)
    start_time = time.time()

    fundamental = solver.fundamental_matrix(system, t1=n_periods * system.period)
    decomposition = FloquetDecomposition.from_fundamental(fundamental, system.period)
    periodic_factor = decomposition.periodic_factor()
    periodicity = periodicity_check(periodic_factor, n_periods=n_periods)

    if verbose:
        print("Floquet analysis completed in {:.2f} seconds".format(time.time() - start_time))
        print("Floquet exponents:")
        for exponent in decomposition.exponents:
            print(f"  {complex(exponent):.10g}")
        print("Floquet multipliers:")
        for multiplier in decomposition.multipliers:
            print(f"  {complex(multiplier):.10g}")
        print(f"det Phi(T) = {float(jnp.real(jnp.linalg.det(decomposition.monodromy))):.10g}, "
              f"Liouville: {float(liouville_determinant(system)):.10g}")
        print(f"Periodic factor needs {periodicity.n_coefficients} Fourier coefficients "
              f"(bandwidth {periodicity.bandwidth:g})")

    return FloquetResult(
        system=system,
        decomposition=decomposition,
        periodic_factor=periodic_factor,
        periodicity=periodicity,
    )
