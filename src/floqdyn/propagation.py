from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import jax
import jax.numpy as jnp
import numpy as np

from .floquet import FloquetDecomposition, PeriodicFactor
from . import constants as const

@dataclass(frozen=True)
class Trajectory:
    ts: jax.Array  # Shape: (n_steps,)
    xs: jax.Array  # Shape: (n_steps, n)
    max_imag: float  # Largest discarded imaginary part
    relative_imag: float  # max_imag relative to max |x|

    @property
    def n(self) -> int:
        return self.xs.shape[1]

def time_grid(period: float, n_periods: int = const.N_PERIODS_TO_PLOT,
              n_points_per_period: int = const.N_POINTS_PER_PERIOD) -> jax.Array:
    return jnp.linspace(0.0, n_periods * period, n_periods * n_points_per_period + 1)

def random_initial_condition(n: int = const.N_STATES, seed: Optional[int] = None) -> jax.Array:
    """Uniform [0, 1) initial condition; unseeded unless a seed is given."""
    rng = np.random.default_rng(seed)
    return jnp.asarray(rng.random(n))

def propagate(
    decomposition: FloquetDecomposition,
    x0: jax.Array,
    ts: jax.Array,
    periodic_factor: Optional[PeriodicFactor] = None,
    verbose: bool = False,
) -> Trajectory:
    """Solution x(t) = real(P(t) exp(tB) x0) for arbitrary, possibly many-period, times.

    Args:
        decomposition: Floquet decomposition providing B and the fundamental matrix.
        x0: Initial condition (shape: (n,)).
        ts: Times at which to evaluate the solution (shape: (n_steps,)).
        periodic_factor: Precomputed P(t); built from the decomposition when omitted.
        verbose: Print a note when the discarded imaginary part is not negligible.

    Returns:
        A Trajectory with xs of shape (n_steps, n).
    """
    x0 = jnp.asarray(x0)
    if x0.shape != (decomposition.n,):
        raise ValueError(f"Decomposition has {decomposition.n} states, but initial condition has shape {x0.shape}. "
                         f"It should have shape ({decomposition.n},).")

    if periodic_factor is None:
        periodic_factor = decomposition.periodic_factor()
    exp_tB = decomposition.exp_tB()

    ts = jnp.atleast_1d(jnp.asarray(ts))
    P = periodic_factor(ts)  # (n_steps, n, n)
    E = exp_tB(ts)  # (n_steps, n, n)
    x_complex = jnp.einsum("kij,kjl,l->ki", P, E, x0)

    xs = jnp.real(x_complex)
    max_imag = float(jnp.max(jnp.abs(jnp.imag(x_complex))))
    relative_imag = max_imag / max(float(jnp.max(jnp.abs(xs))), float(jnp.finfo(xs.dtype).tiny))

    if verbose and relative_imag > const.IMAG_WARNING_TOL:
        print(f"Discarded imaginary part is not negligible: {max_imag:.3e} (relative {relative_imag:.3e})")

    return Trajectory(ts=ts, xs=xs, max_imag=max_imag, relative_imag=relative_imag)
