from .abstract_solver import AbstractSolver
from .chebyshev_collocation_solver import ChebyshevCollocationSolver
from .time_integration_solver import TimeIntegrationSolver
