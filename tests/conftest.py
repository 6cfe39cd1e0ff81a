import matplotlib

matplotlib.use("Agg")

import jax
import pytest

jax.config.update("jax_enable_x64", True)

import floqdyn

A_COUPLING = 0.15


@pytest.fixture(scope="session")
def system():
    return floqdyn.CoupledMathieuSystem(a=A_COUPLING, period=floqdyn.PERIOD)


@pytest.fixture(scope="session")
def fundamental(system):
    return floqdyn.ChebyshevCollocationSolver(n_nodes=64).fundamental_matrix(system)


@pytest.fixture(scope="session")
def decomposition(system, fundamental):
    return floqdyn.FloquetDecomposition.from_fundamental(fundamental, system.period)


@pytest.fixture(scope="session")
def two_period_factor(system):
    fundamental = floqdyn.ChebyshevCollocationSolver(n_nodes=96).fundamental_matrix(system, t1=2 * system.period)
    decomposition = floqdyn.FloquetDecomposition.from_fundamental(fundamental, system.period)
    return decomposition.periodic_factor()
