# gplik/core/model.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Model accessor contract and a dense reference Gaussian process model.
"""
import abc

import gplik.num as gnp
from gplik.config import get_logger
from gplik.errors import DimensionError, NumericalError

_logger = get_logger()


class ModelAccessor(abc.ABC):
    """Read operations a likelihood needs from a Gaussian process model.

    The likelihood strategies only call these four methods; any object
    providing them can be passed to a strategy, subclassing is optional.
    Implementations may cache factorizations, in which case concurrent
    calls on the same instance must be serialized by the caller.
    """

    @abc.abstractmethod
    def compute_label_matrix(self):
        """Return the (n, t) matrix of training labels."""

    @abc.abstractmethod
    def compute_core_matrix_with_determinant(self):
        """Return (C, d) with C = (K + σI)^{-1} and d = det(K + σI)."""

    @abc.abstractmethod
    def compute_derivative_kernel_matrix(self):
        """Return the (p*n, n) vertical stack of ∂K/∂θ_k."""

    @abc.abstractmethod
    def get_sigma(self):
        """Return the noise variance σ."""


class GaussianProcess(ModelAccessor):
    """Dense zero-mean Gaussian process regression model.

    Attributes
    ----------
    covariance : callable
        Returns the kernel matrix. Called as

        K = self.covariance(x, y, self.covparam)

        with x (n x d) and y (m x d) or None (y := x).
    covariance_derivatives : callable
        Returns the derivatives of the kernel matrix with respect to
        covparam, as a (p, n, n) array. Called as

        dK = self.covariance_derivatives(x, self.covparam)

    covparam : array_like
        Kernel hyperparameters (1D array of length p).
    sigma : float
        Noise variance added to the diagonal of the kernel matrix.

    Examples
    --------
    >>> import gplik
    >>> import gplik.num as gnp
    >>> model = gplik.core.GaussianProcess(
    ...     gplik.kernel.gaussian_covariance,
    ...     gplik.kernel.gaussian_covariance_derivatives,
    ...     covparam=[0.0, 0.0],
    ...     sigma=0.01,
    ... )
    >>> model.set_data(gnp.array([[0.0], [0.5], [1.0]]), gnp.array([0.0, 0.4, 0.1]))
    >>> gplik.core.LOG_LIKELIHOOD.value_and_parameter_derivatives(model)
    """

    def __init__(self, covariance, covariance_derivatives, covparam, sigma=0.0):
        if not callable(covariance):
            raise TypeError("covariance must be a callable function")
        if not callable(covariance_derivatives):
            raise TypeError("covariance_derivatives must be a callable function")
        self.covariance = covariance
        self.covariance_derivatives = covariance_derivatives
        self._covparam = gnp.asarray(covparam).reshape(-1)
        self._sigma = float(sigma)
        self.xi = None
        self.zi = None
        self._chol = None

    def __repr__(self):
        output = str("<gplik.core.GaussianProcess object>")
        return output

    def __str__(self):
        output = str("<gplik.core.GaussianProcess object>")
        return output

    # parameters ------------------------------------------------------------

    @property
    def covparam(self):
        return self._covparam

    @covparam.setter
    def covparam(self, value):
        self._covparam = gnp.asarray(value).reshape(-1)
        self._chol = None

    @property
    def sigma(self):
        return self._sigma

    @sigma.setter
    def sigma(self, value):
        self._sigma = float(value)
        self._chol = None

    @property
    def num_samples(self):
        return 0 if self.xi is None else self.xi.shape[0]

    @property
    def num_outputs(self):
        return 0 if self.zi is None else self.zi.shape[1]

    @property
    def num_parameters(self):
        return self._covparam.shape[0]

    # data ------------------------------------------------------------------

    def set_data(self, xi, zi):
        """Replace the training set.

        Parameters
        ----------
        xi : array_like, shape (n, d)
            Observation points.
        zi : array_like, shape (n,) or (n, t)
            Observed values, one column per output.
        """
        xi = gnp.asarray(xi)
        zi = gnp.asarray(zi)
        if xi.ndim == 1:
            xi = xi.reshape(-1, 1)
        if zi.ndim == 1:
            zi = zi.reshape(-1, 1)
        if xi.ndim != 2:
            raise DimensionError("xi should be a 2D array", xi.shape)
        if zi.ndim != 2:
            raise DimensionError("zi should be 1D or 2D", zi.shape)
        if xi.shape[0] != zi.shape[0]:
            raise DimensionError("xi and zi must have the same number of rows", zi.shape)
        self.xi = xi
        self.zi = zi
        self._chol = None

    def add_sample(self, x, y):
        """Append one observation x (d,) with label(s) y (scalar or (t,))."""
        x = gnp.asarray(x).reshape(1, -1)
        y = gnp.asarray(y).reshape(1, -1)
        if self.xi is None:
            self.set_data(x, y)
            return
        if x.shape[1] != self.xi.shape[1]:
            raise DimensionError(
                f"sample must have {self.xi.shape[1]} input dimensions", x.shape
            )
        if y.shape[1] != self.zi.shape[1]:
            raise DimensionError(
                f"label must have {self.zi.shape[1]} outputs", y.shape
            )
        self.set_data(gnp.vstack((self.xi, x)), gnp.vstack((self.zi, y)))

    def _check_data(self):
        if self.xi is None:
            raise ValueError("GaussianProcess has no training data; call set_data first")

    # kernel matrices -------------------------------------------------------

    def compute_kernel_matrix(self):
        """Return K + σI at the observation points."""
        self._check_data()
        K = self.covariance(self.xi, None, self._covparam)
        return K + self._sigma * gnp.eye(K.shape[0])

    def _cholesky(self):
        if self._chol is None:
            K = self.compute_kernel_matrix()
            try:
                self._chol = gnp.cholesky_factor(K)
            except (gnp.LinAlgError, ValueError) as exc:
                raise NumericalError(
                    f"kernel matrix is not positive definite: {exc}"
                ) from exc
            _logger.debug("GaussianProcess: factorized %d x %d kernel matrix", *K.shape)
        return self._chol

    # accessor contract -----------------------------------------------------

    def compute_label_matrix(self):
        self._check_data()
        return self.zi.copy()

    def compute_core_matrix_with_determinant(self):
        L = self._cholesky()
        C = gnp.cholesky_inv(L)
        return C, gnp.determinant_from_cholesky(L)

    def compute_derivative_kernel_matrix(self):
        self._check_data()
        dK = gnp.asarray(self.covariance_derivatives(self.xi, self._covparam))
        p, n, _ = dK.shape
        return dK.reshape(p * n, n)

    def get_sigma(self):
        return self._sigma
