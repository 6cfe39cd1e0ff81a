import time
import jax.numpy as jnp
from equinox import filter_jit
import diffrax

from .abstract_solver import AbstractSolver
from ..system.abstract_system import AbstractPeriodicSystem
from ..chebyshev_function import ChebyshevFunction
from ..utils import chebyshev as cheb
from .. import constants as const

class TimeIntegrationSolver(AbstractSolver):
    '''
    Integrates the matrix equation Phi' = A(t) Phi, Phi(0) = I and samples the
    solution at the Chebyshev points of [0, t1], so the result is interchangeable
    with the collocation solver's.
    '''

    def __init__(self, rtol: float = 1e-10, atol: float = 1e-12, n_nodes: int = const.N_CHEBYSHEV_NODES,
                 max_steps: int = 16384, verbose: bool = False, throw: bool = True):

        self.rtol = rtol
        self.atol = atol
        self.n_nodes = n_nodes
        self.max_steps = max_steps
        self.verbose = verbose
        self.throw = throw

    def fundamental_matrix(self, system: AbstractPeriodicSystem, t1=None) -> ChebyshevFunction:
        t1 = self._end_time(system, t1)

        ts = cheb.chebyshev_nodes(self.n_nodes, (0.0, t1))
        y0 = jnp.eye(system.n_states)

        start_time = time.time()
        sol = self._integrate(system, y0, ts)

        if self.verbose:
            print("Fundamental matrix integrated in {:.2f} seconds ({} steps)".format(
                time.time() - start_time, int(sol.stats["num_steps"])))

        return ChebyshevFunction(sol.ys, (0.0, t1))

    @filter_jit
    def _integrate(self, system, y0, ts):
        return diffrax.diffeqsolve(
            terms=diffrax.ODETerm(system.rhs),
            solver=diffrax.Dopri8(),
            t0=ts[0], t1=ts[-1], dt0=None, max_steps=self.max_steps,
            y0=y0,
            saveat=diffrax.SaveAt(ts=ts),
            throw=self.throw,
            progress_meter=diffrax.NoProgressMeter(),
            stepsize_controller=diffrax.PIDController(rtol=self.rtol, atol=self.atol),
        )
