import jax.numpy as jnp
import numpy as np
import pytest

import floqdyn

A = 0.15


class TestCoupledMathieuSystem:

    def test_coefficient_matrix_at_zero(self, system):
        expected = jnp.array([
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
            [-A, -1.0, 0.0, 0.0],
            [-1.0, -A, 0.0, 0.0],
        ])
        np.testing.assert_allclose(system.A(0.0), expected, atol=1e-15)

    def test_modulation_is_cos_2t(self, system):
        t = 0.37
        np.testing.assert_allclose(system.A(t)[2, 0], -A * np.cos(2 * t), atol=1e-15)

    def test_coefficient_matrix_is_periodic(self, system):
        for t in (0.0, 0.4, 1.9):
            np.testing.assert_allclose(system.A(t + system.period), system.A(t), atol=1e-13)

    def test_trace_is_zero(self, system):
        assert float(system.trace(0.7)) == 0.0
        assert system.n_states == 4
        assert system.n_dof == 2

    def test_rhs_matches_second_order_equations(self, system):
        t = 0.9
        x, y, vx, vy = 0.3, -0.2, 0.5, 0.1
        state = jnp.array([x, y, vx, vy])
        dstate = system.rhs(t, state, None)
        m = 1 + A * np.cos(2 * t)
        np.testing.assert_allclose(dstate[:2], [vx, vy], atol=1e-15)
        np.testing.assert_allclose(dstate[2:], [-m * x + (x - y), -m * y + (y - x)], atol=1e-14)

    def test_vectorised_coefficient_matrix(self, system):
        ts = jnp.linspace(0.0, 1.0, 5)
        stacked = system.A_at(ts)
        assert stacked.shape == (5, 4, 4)
        np.testing.assert_allclose(stacked[3], system.A(ts[3]), atol=1e-15)

    def test_non_positive_period_raises(self):
        with pytest.raises(ValueError):
            floqdyn.CoupledMathieuSystem(a=A, period=0.0)


class TestMathieuOscillator:

    def test_trace_is_minus_damping(self):
        model = floqdyn.MathieuOscillator(delta=1.2, epsilon=0.3, damping=0.05)
        assert float(model.trace(1.1)) == pytest.approx(-0.05)
        assert model.A(0.0).shape == (2, 2)

    def test_coefficient_matrix(self):
        model = floqdyn.MathieuOscillator(delta=1.2, epsilon=0.3, damping=0.05)
        np.testing.assert_allclose(model.A(0.0), [[0.0, 1.0], [-1.5, -0.05]], atol=1e-15)


class TestLinearPeriodicSystem:

    def test_wraps_callable(self):
        model = floqdyn.LinearPeriodicSystem(
            coefficient_matrix=lambda t: jnp.array([[0.0, 1.0], [-1.0 - jnp.cos(t), 0.0]]),
            n=2,
            period=2 * jnp.pi,
        )
        assert model.n_states == 2
        np.testing.assert_allclose(model.A(0.0), [[0.0, 1.0], [-2.0, 0.0]])

    def test_shape_mismatch_raises(self):
        with pytest.raises(ValueError):
            floqdyn.LinearPeriodicSystem(coefficient_matrix=lambda t: jnp.eye(3), n=2, period=1.0)
