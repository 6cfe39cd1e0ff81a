from __future__ import annotations
import jax
import jax.numpy as jnp
import numpy as np
import equinox as eqx
import scipy.linalg
from jaxtyping import Array, Complex, Float
from typing import Optional

from .chebyshev_function import ChebyshevFunction
from .matrix_exponential import MatrixExponentialFunction
from .system.abstract_system import AbstractPeriodicSystem
from .utils import chebyshev as cheb
from . import constants as const

def monodromy_matrix(fundamental: ChebyshevFunction, period: float) -> Float[Array, "n n"]:
    """Phi(T). Exact endpoint value when the fundamental matrix was solved on exactly one period."""
    t0, t1 = fundamental.domain
    if t0 != 0.0:
        raise ValueError(f"Fundamental matrix must start at t = 0, got domain {fundamental.domain}.")
    if abs(t1 - period) <= 1e-12 * max(1.0, period):
        return fundamental.right
    return fundamental(period)

def floquet_matrix(monodromy: Array, period: float) -> Complex[Array, "n n"]:
    """B = log(Phi(T)) / T using scipy's principal matrix logarithm."""
    monodromy = np.asarray(monodromy)
    if monodromy.ndim != 2 or monodromy.shape[0] != monodromy.shape[1]:
        raise ValueError(f"Monodromy matrix must be square, got shape {monodromy.shape}.")
    if not period > 0.0:
        raise ValueError(f"Period must be positive, got {period}.")

    log_monodromy = scipy.linalg.logm(monodromy)
    complex_dtype = np.result_type(monodromy.dtype, np.complex64)
    return jnp.asarray(log_monodromy.astype(complex_dtype)) / period

def floquet_exponents(B: Array) -> Complex[Array, " n"]:
    return jnp.linalg.eigvals(jnp.asarray(B))

def floquet_multipliers(exponents: Array, period: float) -> Complex[Array, " n"]:
    return jnp.exp(jnp.asarray(exponents) * period)

def monodromy_eigenvalues(monodromy: Array) -> Complex[Array, " n"]:
    return jnp.linalg.eigvals(jnp.asarray(monodromy))

def liouville_determinant(system: AbstractPeriodicSystem, period: Optional[float] = None,
                          n_quadrature: int = const.N_QUADRATURE_NODES) -> Float:
    '''
    det Phi(T) = exp(integral_0^T tr A(t) dt), the Wronskian of the principal
    fundamental matrix after one period. Clenshaw-Curtis quadrature.
    '''
    period = system.period if period is None else period
    ts = cheb.chebyshev_nodes(n_quadrature, (0.0, period))
    weights = cheb.clenshaw_curtis_weights(n_quadrature, (0.0, period))
    traces = jax.vmap(system.trace)(ts)
    return jnp.exp(jnp.sum(weights * traces))


class PeriodicFactor(eqx.Module):
    '''
    P(t) = Phi(t) exp(-t B). Inside the solved domain it is evaluated directly
    (unwrapped); the call operator uses the periodic extension P(t mod T).
    '''
    fundamental: ChebyshevFunction
    exp_minus_tB: MatrixExponentialFunction
    period: float = eqx.field(static=True)

    def __init__(self, fundamental: ChebyshevFunction, B: Array, period: float):
        if fundamental.domain[0] != 0.0 or fundamental.domain[1] < period * (1.0 - 1e-12):
            raise ValueError(f"Fundamental matrix domain {fundamental.domain} must cover [0, {period}].")
        self.fundamental = fundamental
        self.exp_minus_tB = MatrixExponentialFunction(B, f=jnp.negative)
        self.period = float(period)

    def unwrapped(self, t: Float[Array, "..."]) -> Complex[Array, "... n n"]:
        t = jnp.asarray(t)
        return jnp.einsum("...ij,...jk->...ik", self.fundamental(t), self.exp_minus_tB(t))

    def __call__(self, t: Float[Array, "..."]) -> Complex[Array, "... n n"]:
        t = jnp.asarray(t)
        return self.unwrapped(jnp.mod(t, self.period))


class FloquetDecomposition(eqx.Module):
    period: float = eqx.field(static=True)
    fundamental: ChebyshevFunction
    monodromy: jax.Array
    B: jax.Array
    exponents: jax.Array
    multipliers: jax.Array

    @classmethod
    def from_fundamental(cls, fundamental: ChebyshevFunction, period: float) -> FloquetDecomposition:
        monodromy = monodromy_matrix(fundamental, period)
        B = floquet_matrix(monodromy, period)
        exponents = floquet_exponents(B)
        multipliers = floquet_multipliers(exponents, period)

        return cls(
            period=float(period),
            fundamental=fundamental,
            monodromy=monodromy,
            B=B,
            exponents=exponents,
            multipliers=multipliers,
        )

    @property
    def n(self) -> int:
        return self.B.shape[0]

    def exp_tB(self) -> MatrixExponentialFunction:
        return MatrixExponentialFunction(self.B)

    def periodic_factor(self) -> PeriodicFactor:
        return PeriodicFactor(self.fundamental, self.B, self.period)

    def __repr__(self):
        exponent_terms = ", ".join([f"{complex(v):.6g}" for v in self.exponents])
        multiplier_terms = ", ".join([f"{complex(v):.6g}" for v in self.multipliers])
        return (f"FloquetDecomposition(n={self.n}, period={self.period:.6f}, "
                f"exponents=[{exponent_terms}], multipliers=[{multiplier_terms}])")
