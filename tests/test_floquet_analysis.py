import jax.numpy as jnp
import numpy as np
import pytest

import floqdyn


@pytest.fixture(scope="module")
def result(system):
    return floqdyn.floquet_analysis(system, solver=floqdyn.ChebyshevCollocationSolver(n_nodes=64), verbose=False)


def test_result_contents(result, decomposition):
    assert isinstance(result.decomposition, floqdyn.FloquetDecomposition)
    assert isinstance(result.periodic_factor, floqdyn.PeriodicFactor)
    assert isinstance(result.periodicity, floqdyn.PeriodicityReport)
    np.testing.assert_allclose(result.multipliers, decomposition.multipliers)
    np.testing.assert_allclose(result.monodromy, result.fundamental.right)
    assert result.exponents.shape == (4,)


def test_propagate_on_default_grid(result):
    trajectory = result.propagate(jnp.array([1.0, 0.0, 0.0, 0.0]))
    assert trajectory.xs.shape == (floqdyn.N_PERIODS_TO_PLOT * floqdyn.N_POINTS_PER_PERIOD + 1, 4)
    assert float(trajectory.ts[-1]) == pytest.approx(floqdyn.N_PERIODS_TO_PLOT * np.pi)


def test_verbose_prints_exponents_and_multipliers(system, capsys):
    floqdyn.floquet_analysis(system, solver=floqdyn.ChebyshevCollocationSolver(n_nodes=32))
    out = capsys.readouterr().out
    assert "Floquet exponents:" in out
    assert "Floquet multipliers:" in out
    assert "Liouville" in out
    lines = out.splitlines()
    start = lines.index("Floquet multipliers:")
    assert len(lines[start + 1:start + 5]) == 4


def test_with_time_integration_solver(system, result):
    integrated = floqdyn.floquet_analysis(system, solver=floqdyn.TimeIntegrationSolver(), verbose=False)
    scale = float(jnp.max(jnp.abs(result.multipliers)))
    np.testing.assert_allclose(jnp.sort_complex(integrated.multipliers), jnp.sort_complex(result.multipliers),
                               atol=1e-7 * scale)


def test_unsupported_precision_raises(system):
    with pytest.raises(ValueError):
        floqdyn.floquet_analysis(system, precision="half", verbose=False)
