import unittest

import numpy as np
import pytest

import gplik
import gplik.num as gnp
from gplik.core import GaussianProcess, ModelAccessor
from gplik.errors import DimensionError, NumericalError


def make_model(covparam=(0.0, 0.7), sigma=0.01):
    return GaussianProcess(
        gplik.kernel.gaussian_covariance,
        gplik.kernel.gaussian_covariance_derivatives,
        covparam,
        sigma=sigma,
    )


class TestGaussianProcess(unittest.TestCase):
    def setUp(self):
        self.xi = gnp.array([[0.0], [0.3], [0.5], [1.0]])
        self.zi = gnp.array([0.1, -0.2, 0.4, 0.0])
        self.model = make_model()
        self.model.set_data(self.xi, self.zi)

    def test_is_model_accessor(self):
        self.assertIsInstance(self.model, ModelAccessor)

    def test_label_matrix(self):
        Y = self.model.compute_label_matrix()
        self.assertEqual(Y.shape, (4, 1))
        np.testing.assert_array_equal(Y[:, 0], self.zi)
        self.assertEqual(self.model.num_samples, 4)
        self.assertEqual(self.model.num_outputs, 1)
        self.assertEqual(self.model.num_parameters, 2)

    def test_label_matrix_is_a_copy(self):
        value = gplik.core.LOG_LIKELIHOOD.evaluate(self.model)
        Y = self.model.compute_label_matrix()
        Y[:] = 100.0
        np.testing.assert_array_equal(self.model.compute_label_matrix()[:, 0], self.zi)
        np.testing.assert_array_equal(gplik.core.LOG_LIKELIHOOD.evaluate(self.model), value)

    def test_core_matrix_and_determinant(self):
        K = gplik.kernel.gaussian_covariance(self.xi, None, self.model.covparam)
        K = K + 0.01 * np.eye(4)
        C, d = self.model.compute_core_matrix_with_determinant()
        np.testing.assert_allclose(C, np.linalg.inv(K), rtol=1e-8, atol=1e-10)
        np.testing.assert_allclose(C, C.T, rtol=1e-10, atol=1e-10)
        self.assertIsInstance(d, np.longdouble)
        self.assertAlmostEqual(float(d) / np.linalg.det(K), 1.0, places=8)

    def test_determinant_does_not_overflow(self):
        xi = gnp.linspace(0.0, 100.0, 400).reshape(-1, 1)
        model = make_model(covparam=(np.log(1e3), 0.0), sigma=1.0)
        model.set_data(xi, np.random.default_rng(0).standard_normal(400))
        _, d = model.compute_core_matrix_with_determinant()
        K = model.compute_kernel_matrix()
        sign, logdet = np.linalg.slogdet(K)
        self.assertEqual(sign, 1.0)
        self.assertGreater(logdet, np.log(np.finfo(np.float64).max))
        if np.isfinite(d):
            self.assertAlmostEqual(float(np.log(d)) / logdet, 1.0, places=10)
        else:
            # longdouble with the range of float64; the log-likelihood clamps it
            value = gplik.core.LOG_LIKELIHOOD.evaluate(model)
            self.assertTrue(np.all(np.isfinite(value)))

    def test_derivative_kernel_matrix(self):
        D = self.model.compute_derivative_kernel_matrix()
        self.assertEqual(D.shape, (8, 4))
        dK = gplik.kernel.gaussian_covariance_derivatives(self.xi, self.model.covparam)
        np.testing.assert_array_equal(D[4:], dK[1])

    def test_sigma(self):
        self.assertEqual(self.model.get_sigma(), 0.01)
        self.model.sigma = 0.5
        self.assertEqual(self.model.get_sigma(), 0.5)
        K = self.model.compute_kernel_matrix()
        np.testing.assert_allclose(np.diag(K), 1.5)

    def test_parameter_change_refactorizes(self):
        C0, d0 = self.model.compute_core_matrix_with_determinant()
        self.model.covparam = [0.5, 0.7]
        C1, d1 = self.model.compute_core_matrix_with_determinant()
        self.assertNotAlmostEqual(float(d0), float(d1))
        np.testing.assert_allclose(
            C1, np.linalg.inv(self.model.compute_kernel_matrix()), rtol=1e-8, atol=1e-10
        )

    def test_add_sample(self):
        model = make_model()
        model.add_sample([0.0], [1.0, 2.0])
        model.add_sample([0.5], [0.0, 1.0])
        self.assertEqual(model.compute_label_matrix().shape, (2, 2))
        self.assertEqual(model.xi.shape, (2, 1))
        with pytest.raises(DimensionError):
            model.add_sample([0.1, 0.2], [0.0, 1.0])
        with pytest.raises(DimensionError):
            model.add_sample([0.1], [0.0])

    def test_set_data_checks_rows(self):
        with pytest.raises(DimensionError):
            self.model.set_data(self.xi, gnp.zeros(3))

    def test_no_data(self):
        with pytest.raises(ValueError):
            make_model().compute_label_matrix()

    def test_not_positive_definite(self):
        self.model.sigma = -10.0
        with self.assertRaises(NumericalError) as cm:
            self.model.compute_core_matrix_with_determinant()
        self.assertIn("not positive definite", cm.exception.reason)

    def test_requires_callables(self):
        with pytest.raises(TypeError):
            GaussianProcess(None, gplik.kernel.gaussian_covariance_derivatives, [0.0, 0.0])
        with pytest.raises(TypeError):
            GaussianProcess(gplik.kernel.gaussian_covariance, None, [0.0, 0.0])


if __name__ == "__main__":
    unittest.main()
