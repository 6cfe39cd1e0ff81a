from abc import ABC, abstractmethod
from typing import Optional

from ..system.abstract_system import AbstractPeriodicSystem
from ..chebyshev_function import ChebyshevFunction

class AbstractSolver(ABC):
    def __init__(self):
        pass

    @abstractmethod
    def fundamental_matrix(self,
            system: AbstractPeriodicSystem,
            t1: Optional[float] = None,
        ) -> ChebyshevFunction:
        """Principal fundamental matrix Phi on [0, t1] with Phi(0) = I. t1 defaults to one period."""
        pass

    @staticmethod
    def _end_time(system: AbstractPeriodicSystem, t1: Optional[float]) -> float:
        if t1 is None:
            return float(system.period)
        if not t1 > 0.0:
            raise ValueError(f"End time must be positive, got {t1}.")
        return float(t1)
