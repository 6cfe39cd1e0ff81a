from __future__ import annotations
from typing import Callable, Optional
import jax
import jax.numpy as jnp
import equinox as eqx
from jaxtyping import Array, Complex, Float

def _identity(t):
    return t

class MatrixExponentialFunction(eqx.Module):
    '''
    The matrix-valued function t -> exp(f(t) M) for a constant square matrix M.

    M is eigendecomposed once, M = V diag(lambda) V^-1, and every evaluation
    reassembles V diag(exp(lambda_i f(t))) V^-1. M is assumed diagonalisable;
    a defective M is not detected and gives whatever the eigensolver returns.
    '''
    eigenvalues: jax.Array
    eigenvectors: jax.Array
    inverse_eigenvectors: jax.Array
    f: Callable = eqx.field(static=True)

    def __init__(self, M: Complex[Array, "n n"], f: Optional[Callable] = None):
        M = jnp.asarray(M)
        if M.ndim != 2 or M.shape[0] != M.shape[1]:
            raise ValueError(f"Matrix must be square, got shape {M.shape}.")

        eigenvalues, eigenvectors = jnp.linalg.eig(M)
        self.eigenvalues = eigenvalues
        self.eigenvectors = eigenvectors
        self.inverse_eigenvectors = jnp.linalg.inv(eigenvectors)
        self.f = _identity if f is None else f

    @property
    def n(self) -> int:
        return self.eigenvalues.shape[0]

    def __call__(self, t: Float[Array, "..."]) -> Complex[Array, "... n n"]:
        ft = jnp.asarray(self.f(jnp.asarray(t)))
        scalar_functions = jnp.exp(self.eigenvalues * ft[..., None])  # (..., n)
        return jnp.einsum("ij,...j,jk->...ik", self.eigenvectors, scalar_functions, self.inverse_eigenvectors)
