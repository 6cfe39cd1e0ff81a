"""
Floquet analysis of linear periodic ODE systems: principal fundamental matrix,
monodromy, Floquet exponents and multipliers, the periodic factor P(t) and
long-horizon propagation x(t) = P(t) exp(tB) x0.
"""

import jax

jax.config.update("jax_enable_x64", True)

from .constants import *

from .system import *

from .chebyshev_function import ChebyshevFunction
from .matrix_exponential import MatrixExponentialFunction

from .solver.abstract_solver import *
from .solver.chebyshev_collocation_solver import *
from .solver.time_integration_solver import *

from .floquet import *
from .periodicity import PeriodicityReport, periodicity_check
from .propagation import Trajectory, propagate, time_grid, random_initial_condition
from .floquet_analysis import FloquetResult, floquet_analysis

from .utils.plotting import *
