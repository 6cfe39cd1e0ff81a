import jax.numpy as jnp
from equinox import filter_jit

'''
Chebyshev points of the second kind and the spectral operators built on them.

Nodes are x_k = cos(pi k / N), k = 0..N, ordered from +1 to -1. On an interval
[t0, t1] they are mapped with t = t0 + (t1 - t0) (1 - x) / 2, so the mapped
nodes are ascending with t_0 = t0 and t_N = t1.
'''

def chebyshev_points(n_nodes: int) -> jnp.ndarray:
    if n_nodes < 2:
        raise ValueError(f"At least 2 Chebyshev nodes are required, got {n_nodes}.")
    N = n_nodes - 1
    return jnp.cos(jnp.pi * jnp.arange(n_nodes) / N)

def chebyshev_nodes(n_nodes: int, domain: tuple) -> jnp.ndarray:
    t0, t1 = domain
    x = chebyshev_points(n_nodes)
    return t0 + 0.5 * (t1 - t0) * (1.0 - x)

def differentiation_matrix(n_nodes: int, domain: tuple = (-1.0, 1.0)) -> jnp.ndarray:
    '''
    Differentiation matrix D of size (n_nodes, n_nodes) acting on values at the
    mapped Chebyshev nodes. Spectral methods in MATLAB, Trefethen, cheb.m.
    '''
    N = n_nodes - 1
    x = chebyshev_points(n_nodes)

    b = jnp.ones(n_nodes).at[0].set(2.0).at[-1].set(2.0)
    sign = jnp.where(jnp.arange(n_nodes) % 2 == 0, 1.0, -1.0)
    c = b * sign

    dX = x[:, None] - x[None, :]
    D = jnp.outer(c, 1.0 / c) / (dX + jnp.eye(n_nodes))
    D = D - jnp.diag(jnp.sum(D, axis=1))

    # dx/dt for the affine map onto the domain
    t0, t1 = domain
    return D * (-2.0 / (t1 - t0))

def barycentric_weights(n_nodes: int) -> jnp.ndarray:
    w = jnp.where(jnp.arange(n_nodes) % 2 == 0, 1.0, -1.0)
    w = w.at[0].multiply(0.5)
    w = w.at[-1].multiply(0.5)
    return w

@filter_jit
def barycentric_interpolate(nodes: jnp.ndarray, weights: jnp.ndarray, values: jnp.ndarray, t: jnp.ndarray) -> jnp.ndarray:
    '''
    Evaluate the interpolant through (nodes, values) at the points t.

    Parameters:
    nodes: jnp.ndarray
        Interpolation nodes, shape (n_nodes,)
    weights: jnp.ndarray
        Barycentric weights, shape (n_nodes,)
    values: jnp.ndarray
        Values at the nodes, shape (n_nodes, ...)
    t: jnp.ndarray
        Evaluation points, shape (k,)
    Returns:
    jnp.ndarray
        Interpolated values, shape (k, ...)
    '''
    trailing_shape = values.shape[1:]
    flat_values = values.reshape(values.shape[0], -1)

    diff = t[:, None] - nodes[None, :]
    exact = diff == 0.0
    diff = jnp.where(exact, 1.0, diff)

    c = weights[None, :] / diff
    interpolated = (c @ flat_values) / jnp.sum(c, axis=1, keepdims=True)

    # Points that coincide with a node take the nodal value
    exact_any = jnp.any(exact, axis=1, keepdims=True)
    exact_values = flat_values[jnp.argmax(exact, axis=1)]
    result = jnp.where(exact_any, exact_values, interpolated)

    return result.reshape((t.shape[0],) + trailing_shape)

def vals2coeffs(values: jnp.ndarray) -> jnp.ndarray:
    '''
    Chebyshev coefficients of the interpolant through values at the
    Chebyshev points of the second kind (ordered from +1 to -1).
    Follows chebfun's chebtech2/vals2coeffs.
    '''
    n = values.shape[0]
    if n <= 1:
        return values

    tmp = jnp.concatenate([values[:n - 1], values[n - 1:0:-1]], axis=0)
    coeffs = jnp.fft.ifft(tmp, axis=0)[:n]
    if not jnp.iscomplexobj(values):
        coeffs = jnp.real(coeffs)
    coeffs = coeffs.at[1:n - 1].multiply(2.0)
    return coeffs

def chop_length(coeffs: jnp.ndarray, tol: float) -> int:
    '''Number of leading coefficients kept after dropping the trailing ones below tol * max|c|.'''
    magnitude = jnp.abs(coeffs).reshape(coeffs.shape[0], -1).max(axis=1)
    scale = float(jnp.max(magnitude))
    if scale == 0.0:
        return 1

    significant = jnp.nonzero(magnitude > tol * scale)[0]
    return int(significant[-1]) + 1

def clenshaw_curtis_weights(n_nodes: int, domain: tuple = (-1.0, 1.0)) -> jnp.ndarray:
    '''
    Clenshaw-Curtis quadrature weights for the mapped Chebyshev nodes.
    Spectral methods in MATLAB, Trefethen, clencurt.m.
    '''
    N = n_nodes - 1
    theta = jnp.pi * jnp.arange(n_nodes) / N
    w = jnp.zeros(n_nodes)
    v = jnp.ones(N - 1)
    interior = theta[1:-1]

    if N % 2 == 0:
        w = w.at[0].set(1.0 / (N**2 - 1)).at[N].set(1.0 / (N**2 - 1))
        for k in range(1, N // 2):
            v = v - 2.0 * jnp.cos(2 * k * interior) / (4 * k**2 - 1)
        v = v - jnp.cos(N * interior) / (N**2 - 1)
    else:
        w = w.at[0].set(1.0 / N**2).at[N].set(1.0 / N**2)
        for k in range(1, (N + 1) // 2):
            v = v - 2.0 * jnp.cos(2 * k * interior) / (4 * k**2 - 1)

    w = w.at[1:-1].set(2.0 * v / N)

    t0, t1 = domain
    return w * 0.5 * (t1 - t0)
