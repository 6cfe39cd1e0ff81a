from __future__ import annotations
from dataclasses import field
from typing import Callable
import jax.numpy as jnp

from .abstract_system import AbstractPeriodicSystem, system

@system
class LinearPeriodicSystem(AbstractPeriodicSystem):
    '''
    x' = A(t) x for an arbitrary JAX-traceable coefficient matrix callable.
    The caller is responsible for A(t + period) = A(t).
    '''
    coefficient_matrix: Callable = field(repr=False)
    n: int

    def __post_init__(self):
        super().__post_init__()
        shape = jnp.shape(self.coefficient_matrix(0.0))
        if shape != (self.n, self.n):
            raise ValueError(f"Coefficient matrix has shape {shape}. It should have shape ({self.n}, {self.n}).")

    def A(self, t):
        return jnp.asarray(self.coefficient_matrix(t))

    @property
    def n_states(self) -> int:
        return self.n
