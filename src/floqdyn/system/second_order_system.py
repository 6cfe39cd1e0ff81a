from __future__ import annotations
import jax.numpy as jnp
from jaxtyping import Float, Array
from abc import abstractmethod

from .abstract_system import AbstractPeriodicSystem, system

@system
class AbstractSecondOrderSystem(AbstractPeriodicSystem):

    @abstractmethod
    def stiffness_matrix(self, t: Float) -> Float[Array, "n_dof n_dof"]:
        """ Stiffness term
        d2q/dt2 + C(t) dq/dt + K(t) q = 0
        """
        pass

    @abstractmethod
    def damping_matrix(self, t: Float) -> Float[Array, "n_dof n_dof"]:
        """ Damping term
        d2q/dt2 + C(t) dq/dt + K(t) q = 0
        """
        pass

    @property
    @abstractmethod
    def n_dof(self) -> int:
        """Number of degrees of freedom"""
        pass

    @property
    def n_states(self) -> int:
        return self.n_dof * 2

    def A(self, t):
        # State ordering is [q, dq/dt]
        zero_block = jnp.zeros((self.n_dof, self.n_dof))
        identity_block = jnp.eye(self.n_dof)
        A_bottom_left = -self.stiffness_matrix(t)
        A_bottom_right = -self.damping_matrix(t)

        return jnp.block([[zero_block, identity_block],
                          [A_bottom_left, A_bottom_right]])

    def acceleration(self, t, q, dq_dt):
        return -self.damping_matrix(t) @ dq_dt - self.stiffness_matrix(t) @ q
