from __future__ import annotations
import jax
import jax.numpy as jnp
import equinox as eqx
from jax import core as jax_core
from jaxtyping import Array, Float

from .utils import chebyshev as cheb
from . import constants as const

class ChebyshevFunction(eqx.Module):
    '''
    Matrix-valued function on [t0, t1] stored by its values at the Chebyshev
    points of the second kind, shape (n_nodes, ...).
    '''
    values: jax.Array
    domain: tuple = eqx.field(static=True)

    def __init__(self, values: jax.Array, domain: tuple):
        self.values = jnp.asarray(values)
        self.domain = (float(domain[0]), float(domain[1]))
        if self.values.shape[0] < 2:
            raise ValueError(f"At least 2 nodal values are required, got shape {self.values.shape}.")
        if not self.domain[1] > self.domain[0]:
            raise ValueError(f"Domain must satisfy t0 < t1, got {self.domain}.")

    @property
    def n_nodes(self) -> int:
        return self.values.shape[0]

    @property
    def shape(self) -> tuple:
        return self.values.shape[1:]

    @property
    def nodes(self) -> jax.Array:
        return cheb.chebyshev_nodes(self.n_nodes, self.domain)

    @property
    def left(self) -> jax.Array:
        return self.values[0]

    @property
    def right(self) -> jax.Array:
        return self.values[-1]

    def __call__(self, t: Float[Array, "..."]) -> jax.Array:
        t = jnp.asarray(t, dtype=self.nodes.dtype)
        self._check_domain(t)

        ts = jnp.atleast_1d(t).ravel()
        out = cheb.barycentric_interpolate(self.nodes, cheb.barycentric_weights(self.n_nodes), self.values, ts)
        return out.reshape(t.shape + self.shape)

    def derivative(self) -> ChebyshevFunction:
        D = cheb.differentiation_matrix(self.n_nodes, self.domain)
        return ChebyshevFunction(jnp.tensordot(D, self.values, axes=(1, 0)), self.domain)

    def coefficients(self) -> jax.Array:
        return cheb.vals2coeffs(self.values)

    def n_coefficients(self, tol: float = const.CHEBYSHEV_CHOP_TOL) -> int:
        return cheb.chop_length(self.coefficients(), tol)

    def _check_domain(self, t):
        if isinstance(t, jax_core.Tracer):
            return
        t0, t1 = self.domain
        slack = 1e-12 * max(1.0, abs(t1 - t0))
        if jnp.any(t < t0 - slack) or jnp.any(t > t1 + slack):
            raise ValueError(f"Evaluation points must lie in the domain {self.domain}, got range "
                             f"[{float(jnp.min(t))}, {float(jnp.max(t))}].")
