import jax.numpy as jnp
import numpy as np
import pytest
import scipy.linalg

import floqdyn

M = jnp.array(np.random.default_rng(0).standard_normal((4, 4)))


def _match_up_to_ordering(a, b, tol):
    a = np.asarray(a)
    b = list(np.asarray(b))
    for value in a:
        distances = [abs(value - other) for other in b]
        idx = int(np.argmin(distances))
        assert distances[idx] < tol, f"{value} has no counterpart in {b}"
        b.pop(idx)


class TestMatrixExponentialFunction:

    def test_matches_expm(self):
        exp_tM = floqdyn.MatrixExponentialFunction(M)
        np.testing.assert_allclose(exp_tM(0.7), scipy.linalg.expm(0.7 * np.asarray(M)), atol=1e-10)

    def test_negative_argument(self):
        exp_minus_tM = floqdyn.MatrixExponentialFunction(M, f=jnp.negative)
        np.testing.assert_allclose(exp_minus_tM(0.7), scipy.linalg.expm(-0.7 * np.asarray(M)), atol=1e-10)

    def test_scalar_function_argument(self):
        exp_fM = floqdyn.MatrixExponentialFunction(M, f=jnp.sin)
        np.testing.assert_allclose(exp_fM(1.1), scipy.linalg.expm(np.sin(1.1) * np.asarray(M)), atol=1e-10)

    def test_vector_of_times(self):
        exp_tM = floqdyn.MatrixExponentialFunction(M)
        ts = jnp.linspace(0.0, 1.0, 5)
        stacked = exp_tM(ts)
        assert stacked.shape == (5, 4, 4)
        np.testing.assert_allclose(stacked[0], jnp.eye(4), atol=1e-12)
        np.testing.assert_allclose(stacked[-1], scipy.linalg.expm(np.asarray(M)), atol=1e-10)

    def test_non_square_raises(self):
        with pytest.raises(ValueError):
            floqdyn.MatrixExponentialFunction(jnp.ones((2, 3)))


class TestFloquetDecomposition:

    def test_exp_BT_reproduces_monodromy(self, system, decomposition):
        exp_BT = scipy.linalg.expm(np.asarray(decomposition.B) * system.period)
        scale = float(jnp.max(jnp.abs(decomposition.monodromy)))
        np.testing.assert_allclose(exp_BT, decomposition.monodromy, atol=1e-10 * scale)

    def test_monodromy_is_endpoint_value(self, fundamental, decomposition):
        np.testing.assert_array_equal(decomposition.monodromy, fundamental.right)

    def test_multipliers_are_monodromy_eigenvalues(self, decomposition):
        eigenvalues = floqdyn.monodromy_eigenvalues(decomposition.monodromy)
        scale = float(jnp.max(jnp.abs(eigenvalues)))
        _match_up_to_ordering(decomposition.multipliers, eigenvalues, 1e-9 * scale)

    def test_multipliers_are_exponentials_of_exponents(self, system, decomposition):
        np.testing.assert_allclose(decomposition.multipliers, jnp.exp(decomposition.exponents * system.period))
        assert decomposition.exponents.shape == (4,)

    def test_liouville_identity(self, system, decomposition):
        det_monodromy = jnp.linalg.det(decomposition.monodromy)
        product = jnp.prod(decomposition.multipliers)
        assert float(jnp.abs(product - det_monodromy)) < 1e-9
        assert float(floqdyn.liouville_determinant(system)) == pytest.approx(1.0, abs=1e-14)
        assert float(det_monodromy) == pytest.approx(1.0, abs=1e-9)

    def test_multipliers_come_in_reciprocal_pairs(self, decomposition):
        multipliers = np.asarray(decomposition.multipliers)
        _match_up_to_ordering(multipliers, 1.0 / multipliers, 1e-8 * float(np.max(np.abs(multipliers))))

    def test_damped_oscillator_liouville_identity(self):
        model = floqdyn.MathieuOscillator(delta=1.4, epsilon=0.4, damping=0.1)
        fundamental = floqdyn.ChebyshevCollocationSolver(n_nodes=48).fundamental_matrix(model)
        decomposition = floqdyn.FloquetDecomposition.from_fundamental(fundamental, model.period)
        expected = np.exp(-0.1 * np.pi)
        assert float(floqdyn.liouville_determinant(model)) == pytest.approx(expected, rel=1e-12)
        assert abs(complex(jnp.prod(decomposition.multipliers)) - expected) < 1e-9

    def test_constant_system_recovers_generator(self):
        A = jnp.array([[0.0, 1.0], [-2.0, -0.3]])
        model = floqdyn.LinearPeriodicSystem(coefficient_matrix=lambda t: A, n=2, period=0.5)
        fundamental = floqdyn.ChebyshevCollocationSolver(n_nodes=32).fundamental_matrix(model)
        B = floqdyn.floquet_matrix(floqdyn.monodromy_matrix(fundamental, 0.5), 0.5)
        np.testing.assert_allclose(B, A, atol=1e-10)

    def test_floquet_matrix_is_complex(self, decomposition):
        assert jnp.iscomplexobj(decomposition.B)
        assert decomposition.B.shape == (4, 4)

    def test_floquet_matrix_follows_monodromy_precision(self):
        monodromy = np.diag([2.0, 0.5])
        single = floqdyn.floquet_matrix(monodromy.astype(np.float32), 1.0)
        double = floqdyn.floquet_matrix(monodromy, 1.0)
        assert single.dtype == jnp.complex64
        assert double.dtype == jnp.complex128
        np.testing.assert_allclose(single, np.diag(np.log([2.0, 0.5])), atol=1e-6)

    def test_non_square_monodromy_raises(self):
        with pytest.raises(ValueError):
            floqdyn.floquet_matrix(jnp.ones((2, 3)), 1.0)

    def test_monodromy_requires_domain_starting_at_zero(self):
        f = floqdyn.ChebyshevFunction(jnp.zeros((4, 2, 2)), (1.0, 2.0))
        with pytest.raises(ValueError):
            floqdyn.monodromy_matrix(f, 1.0)
