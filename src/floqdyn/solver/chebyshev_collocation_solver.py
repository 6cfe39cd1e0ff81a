import time
import jax
import jax.numpy as jnp
from equinox import filter_jit
import lineax as lx

from .abstract_solver import AbstractSolver
from ..system.abstract_system import AbstractPeriodicSystem
from ..chebyshev_function import ChebyshevFunction
from ..utils import chebyshev as cheb
from .. import constants as const

class ChebyshevCollocationSolver(AbstractSolver):
    '''
    Spectral collocation solve of the initial-value block operator

        [ s E_0 (x) I       ]           [ s I ]
        [ D (x) I - A(t_k)  ] Phi   =   [ 0 ]

    on the Chebyshev points of [0, t1]. The n boundary rows evaluate every
    component at t = 0, scaled by s = max|D|, and replace the collocation rows
    at the first node. This leaves a square system with n right-hand sides,
    one per column of Phi.
    '''

    def __init__(self, n_nodes: int = const.N_CHEBYSHEV_NODES, verbose: bool = False):
        if n_nodes < 2:
            raise ValueError(f"n_nodes must be at least 2, got {n_nodes}.")
        self.n_nodes = n_nodes
        self.verbose = verbose

    def fundamental_matrix(self, system: AbstractPeriodicSystem, t1=None) -> ChebyshevFunction:
        t1 = self._end_time(system, t1)
        n = system.n_states
        domain = (0.0, t1)

        start_time = time.time()
        operator, rhs = self.block_operator(system, t1)
        solution = self._solve(operator, rhs)  # (n * n_nodes, n)

        # Unknowns are ordered component-major: (component, node)
        values = solution.reshape(n, self.n_nodes, n).transpose(1, 0, 2)  # (n_nodes, n, n)
        fundamental = ChebyshevFunction(values, domain)

        if self.verbose:
            print(f"Collocation operator: {operator.shape[0]}x{operator.shape[1]}, {n} right-hand sides")
            print("Fundamental matrix solved in {:.2f} seconds".format(time.time() - start_time))
            print(f"Max collocation residual: {float(self.residual(system, fundamental)):.3e}")

        return fundamental

    def block_operator(self, system: AbstractPeriodicSystem, t1: float):
        '''
        Returns:
        operator: jnp.ndarray
            Square collocation matrix, shape (n * n_nodes, n * n_nodes)
        rhs: jnp.ndarray
            Right-hand side [s I; 0], shape (n * n_nodes, n)

        The boundary rows are scaled by s = max|D| so they carry the same weight
        as the collocation rows under pivoting.
        '''
        n = system.n_states
        N1 = self.n_nodes
        ts = cheb.chebyshev_nodes(N1, (0.0, t1))
        D = cheb.differentiation_matrix(N1, (0.0, t1))

        A_nodes = system.A_at(ts)  # (n_nodes, n, n)
        coupling = jnp.einsum("kij,kl->ikjl", A_nodes, jnp.eye(N1)).reshape(n * N1, n * N1)
        differential = jnp.kron(jnp.eye(n), D) - coupling

        # Drop the collocation rows at t = 0, they are replaced by the boundary rows
        differential = differential.reshape(n, N1, n * N1)[:, 1:, :].reshape(n * (N1 - 1), n * N1)

        left_evaluation = jnp.zeros(N1).at[0].set(1.0)
        scale = jnp.max(jnp.abs(D))
        boundary = jnp.kron(jnp.eye(n), left_evaluation[None, :]) * scale  # (n, n * n_nodes)

        operator = jnp.concatenate([boundary, differential], axis=0)
        rhs = jnp.concatenate([scale * jnp.eye(n), jnp.zeros((n * (N1 - 1), n))], axis=0)
        return operator, rhs

    def residual(self, system: AbstractPeriodicSystem, fundamental: ChebyshevFunction) -> jax.Array:
        """Max norm of Phi' - A Phi at the Chebyshev nodes."""
        dPhi = fundamental.derivative().values
        A_Phi = jnp.einsum("kij,kjl->kil", system.A_at(fundamental.nodes), fundamental.values)
        return jnp.max(jnp.abs(dPhi - A_Phi))

    @filter_jit
    def _solve(self, operator, rhs):
        matrix_operator = lx.MatrixLinearOperator(operator)
        solver = lx.LU()

        def _solve_one_column(b):
            return lx.linear_solve(matrix_operator, b, solver=solver).value

        return jax.vmap(_solve_one_column, in_axes=1, out_axes=1)(rhs)
