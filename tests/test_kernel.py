import numpy as np
import pytest

import gplik.num as gnp
from gplik.kernel import (
    gaussian_kernel,
    gaussian_covariance,
    gaussian_covariance_derivatives,
)


def _points():
    rng = np.random.default_rng(1)
    return rng.uniform(size=(5, 2))


def test_gaussian_kernel_values():
    h = gnp.array([0.0, 1.0, 2.0])
    np.testing.assert_allclose(gaussian_kernel(h), np.exp(-0.5 * h**2))


def test_covariance_is_symmetric_with_variance_on_diagonal():
    x = _points()
    K = gaussian_covariance(x, None, gnp.array([np.log(2.0), 0.3]))
    np.testing.assert_allclose(K, K.T)
    np.testing.assert_allclose(np.diag(K), 2.0)


def test_covariance_isotropic_formula():
    x = _points()
    rho = 0.7
    K = gaussian_covariance(x, x, gnp.array([0.0, -np.log(rho)]))
    sq = ((x[:, None, :] - x[None, :, :]) ** 2).sum(axis=-1)
    np.testing.assert_allclose(K, np.exp(-0.5 * sq / rho**2), rtol=1e-12)


def test_pairwise():
    x = _points()
    y = x[::-1].copy()
    covparam = gnp.array([0.2, 0.1, -0.4])
    full = gaussian_covariance(x, y, covparam)
    np.testing.assert_allclose(gaussian_covariance(x, y, covparam, pairwise=True), np.diag(full))
    np.testing.assert_allclose(
        gaussian_covariance(x, None, covparam, pairwise=True), np.exp(0.2) * np.ones(5)
    )


@pytest.mark.parametrize("covparam", [[0.3, 0.5], [0.3, 0.5, -0.2]])
def test_derivatives_match_finite_differences(covparam):
    x = _points()
    theta = gnp.array(covparam)
    dK = gaussian_covariance_derivatives(x, theta)
    assert dK.shape == (len(covparam), 5, 5)
    for k in range(len(covparam)):

        def f(v):
            t = theta.copy()
            t[k] = v
            return gaussian_covariance(x, None, t)

        fd = gnp.derivative_finite_diff(f, theta[k], 1e-4)
        np.testing.assert_allclose(dK[k], fd, rtol=1e-7, atol=1e-9)


def test_covparam_too_short():
    with pytest.raises(ValueError):
        gaussian_covariance(_points(), None, gnp.array([0.0]))
