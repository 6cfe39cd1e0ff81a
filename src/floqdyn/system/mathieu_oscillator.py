from __future__ import annotations
import jax.numpy as jnp

from .. import constants as const
from .second_order_system import AbstractSecondOrderSystem, system

@system
class MathieuOscillator(AbstractSecondOrderSystem):
    '''
    Damped Mathieu oscillator

        q'' + damping q' + (delta + epsilon cos(2 pi t / T)) q = 0

    tr A(t) = -damping, so det Phi(T) = exp(-damping T).
    '''
    delta: float
    epsilon: float
    damping: float = 0.0
    period: float = const.PERIOD

    def stiffness_matrix(self, t):
        return jnp.atleast_2d(self.delta + self.epsilon * jnp.cos(2.0 * jnp.pi * t / self.period))

    def damping_matrix(self, t):
        return jnp.atleast_2d(jnp.asarray(self.damping, dtype=float))

    @property
    def n_dof(self) -> int:
        return 1

    def __repr__(self):
        return (f"MathieuOscillator(delta={float(self.delta):.6f}, epsilon={float(self.epsilon):.6f}, "
                f"damping={float(self.damping):.6f}, period={float(self.period):.6f})")
