from __future__ import annotations
import jax.numpy as jnp

from .. import constants as const
from .second_order_system import AbstractSecondOrderSystem, system

@system
class CoupledMathieuSystem(AbstractSecondOrderSystem):
    '''
    Two Mathieu oscillators with a spring coupling between them:

        x'' + (1 + a cos(2 pi t / T)) x = x - y
        y'' + (1 + a cos(2 pi t / T)) y = y - x

    With the default period T = pi the modulation is a cos(2t).
    '''
    a: float = const.COUPLING_AMPLITUDE
    period: float = const.PERIOD

    def modulation(self, t):
        return self.a * jnp.cos(2.0 * jnp.pi * t / self.period)

    def stiffness_matrix(self, t):
        # (1 + a cos) x - (x - y) = a cos x + y
        m = self.modulation(t)
        return jnp.array([[m, 1.0],
                          [1.0, m]])

    def damping_matrix(self, t):
        return jnp.zeros((2, 2))

    @property
    def n_dof(self) -> int:
        return 2

    def __repr__(self):
        return f"CoupledMathieuSystem(a={float(self.a):.6f}, period={float(self.period):.6f})"
