from __future__ import annotations
from dataclasses import dataclass
import jax
import jax.numpy as jnp
from jaxtyping import Float, Array, PyTree
from abc import abstractmethod, ABC

system = lambda cls: dataclass(eq=False, kw_only=True)(cls)

@system
class AbstractPeriodicSystem(ABC):
    period: float

    def __post_init__(self):
        if not self.period > 0.0:
            raise ValueError(f"Period must be positive, got {self.period}.")

    def __init_subclass__(cls):
        super().__init_subclass__()

    def rhs(self, t: Float, state: Array, args: PyTree = None) -> Array:
        """Right-hand side of the linear periodic system x' = A(t) x
        Args:
            t (float): Time
            state (Array): State vector, shape (n_states,) or (n_states, m)
            args (PyTree): Unused, kept for diffrax compatibility
        """
        return self.A(t) @ state

    @property
    @abstractmethod
    def n_states(self) -> int:
        """Dimension of the first-order state"""
        pass

    @abstractmethod
    def A(self, t: Float) -> Float[Array, "n n"]:
        """Coefficient matrix A(t), periodic with self.period"""
        pass

    def trace(self, t: Float) -> Float:
        return jnp.trace(self.A(t))

    def A_at(self, ts: Float[Array, " k"]) -> Float[Array, "k n n"]:
        return jax.vmap(self.A)(jnp.atleast_1d(ts))
