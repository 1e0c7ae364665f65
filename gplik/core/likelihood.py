# gplik/core/likelihood.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian-process marginal likelihoods and their hyperparameter derivatives.

Two strategies are provided, both reading the model only through the
accessor contract of `gplik.core.model.ModelAccessor`:

PlainLikelihood
    Marginal likelihood p(y | θ) for each output column.
LogLikelihood
    Log marginal likelihood, its gradient with respect to the kernel
    hyperparameters and the per-output Jacobian of that gradient.

With K the kernel matrix, σ the noise, C = (K + σI)^{-1}, d = det(K + σI),
α = C y and ∂K/∂θ_k the derivative kernel blocks, the log-likelihood of
one output is

    log p(y | θ) = -0.5 yᵀ C y - 0.5 log d - (n/2) log 2π

and its gradient follows from the trace identity

    ∂/∂θ_k log p(y | θ) = 0.5 tr((α αᵀ - C) ∂K/∂θ_k).
"""
import abc

import gplik.num as gnp
from gplik.config import get_logger
from gplik.errors import DimensionError, LikelihoodNotImplementedError, NumericalError
from .linalg import (
    diag_quadratic_forms,
    split_derivative_blocks,
    trace_of_products,
    per_output_trace_of_products,
)

_logger = get_logger()

OPERATIONS = (
    "evaluate",
    "parameter_derivatives",
    "value_and_parameter_derivatives",
    "value_and_jacobian",
)


def _check_determinant_sign(determinant, likelihood):
    if determinant < -gnp.machine_eps():
        raise NumericalError(
            f"{likelihood}: determinant negative", determinant=determinant
        )


def _check_labels(Y, C):
    if Y.shape[0] != C.shape[0]:
        raise DimensionError(
            f"label matrix must have {C.shape[0]} rows to match the core matrix",
            Y.shape,
        )


class Likelihood(abc.ABC):
    """Base class of the likelihood strategies.

    Every operation takes the model as its only argument and reads it
    through the `_fetch_*` helpers. Operations that a subclass does not
    override raise `LikelihoodNotImplementedError`; use `supports` to
    query a strategy beforehand.

    Instances hold no state: they compare equal by type, are hashable,
    and can be shared between threads (on distinct models).
    """

    __slots__ = ()

    def __call__(self, model):
        return self.evaluate(model)

    def evaluate(self, model):
        """Likelihood value for each output column, shape (t,)."""
        raise LikelihoodNotImplementedError("evaluate", self.describe())

    def parameter_derivatives(self, model):
        """Gradient w.r.t. the kernel hyperparameters, shape (p,)."""
        raise LikelihoodNotImplementedError("parameter_derivatives", self.describe())

    def value_and_parameter_derivatives(self, model):
        """Tuple (value (t,), gradient (p,)) computed in one pass."""
        raise LikelihoodNotImplementedError(
            "value_and_parameter_derivatives", self.describe()
        )

    def value_and_jacobian(self, model):
        """Tuple (value (t,), jacobian (t, p))."""
        raise LikelihoodNotImplementedError("value_and_jacobian", self.describe())

    @abc.abstractmethod
    def describe(self):
        """Name of the strategy."""

    def supports(self, operation):
        """Return True if this strategy implements `operation`.

        Parameters
        ----------
        operation : str
            One of `OPERATIONS`.
        """
        if operation not in OPERATIONS:
            raise ValueError(f"operation must be one of {OPERATIONS}")
        return getattr(type(self), operation) is not getattr(Likelihood, operation)

    def __str__(self):
        return self.describe()

    def __repr__(self):
        return f"{type(self).__name__}()"

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    # accessor contract -----------------------------------------------------

    def _fetch_labels(self, model):
        Y = gnp.asarray(model.compute_label_matrix())
        if Y.ndim == 1:
            Y = Y.reshape(-1, 1)  # (n,) -> (n,1)
        elif Y.ndim != 2:
            raise DimensionError("label matrix must be 1D or 2D", Y.shape)
        return Y

    def _fetch_core_matrix_and_determinant(self, model):
        C, determinant = model.compute_core_matrix_with_determinant()
        C = gnp.asarray(C)
        if C.ndim != 2 or C.shape[0] != C.shape[1]:
            raise DimensionError("core matrix must be square", C.shape)
        return C, gnp.as_high_precision(determinant)

    def _fetch_derivative_kernel_stack(self, model):
        return gnp.asarray(model.compute_derivative_kernel_matrix())

    def _fetch_noise(self, model):
        return model.get_sigma()


class PlainLikelihood(Likelihood):
    """Gaussian marginal likelihood

        p(y | θ) = (2π)^{-n/2} d^{-1/2} exp(-0.5 yᵀ C y),

    evaluated independently for each output column of the label matrix.
    """

    __slots__ = ()

    def evaluate(self, model):
        Y = self._fetch_labels(model)
        C, determinant = self._fetch_core_matrix_and_determinant(model)
        _check_labels(Y, C)
        n = C.shape[0]

        # data fit
        df = gnp.exp(-0.5 * diag_quadratic_forms(Y, gnp.matmul(C, Y)))

        # complexity penalty
        _check_determinant_sign(determinant, self.describe())
        if determinant <= gnp.machine_eps():
            _logger.warning(
                "%s: determinant %s clamped to the smallest positive value",
                self.describe(),
                determinant,
            )
            tiny = gnp.as_high_precision(gnp.smallest_positive())
            cp = 1.0 / gnp.sqrt(tiny)
        else:
            cp = 1.0 / gnp.sqrt(determinant)
        cp = gnp.working_dtype()(cp)

        # constant term
        ct = (2.0 * gnp.pi) ** (-n / 2.0)

        return df * cp * ct

    def describe(self):
        return "PlainLikelihood"


class LogLikelihood(Likelihood):
    """Gaussian log marginal likelihood with analytic derivatives.

    For a label matrix with t columns, `evaluate` returns t values.
    `parameter_derivatives` uses the aggregate α αᵀ = Σ_i α_i α_iᵀ,
    which is the exact gradient when t = 1; `value_and_jacobian` gives
    the gradient of each output separately.
    """

    __slots__ = ()

    def _complexity_penalty(self, determinant):
        _check_determinant_sign(determinant, self.describe())
        # clamp to the range of the determinant type, not the working dtype
        tiny, fmax = gnp.high_precision_limits()
        if determinant <= tiny:
            _logger.warning(
                "%s: determinant %s clamped to %s", self.describe(), determinant, tiny
            )
            return -0.5 * gnp.log(tiny)
        if determinant > fmax:
            _logger.warning(
                "%s: determinant %s clamped to %s", self.describe(), determinant, fmax
            )
            return -0.5 * gnp.log(fmax)
        return -0.5 * gnp.log(determinant)

    def _value(self, Y, C, alpha, determinant):
        # data fit
        df = -0.5 * diag_quadratic_forms(Y, alpha)

        # complexity penalty
        cp = self._complexity_penalty(determinant)

        # constant term
        ct = -C.shape[0] / 2.0 * gnp.log(2.0 * gnp.pi)

        value = df + gnp.working_dtype()(cp + ct)
        if not gnp.isfinite(gnp.sum(value)):
            _logger.error(
                "%s: df: %s, cp: %s, ct: %s, determinant: %s",
                self.describe(),
                df,
                cp,
                ct,
                determinant,
            )
            raise NumericalError(
                f"{self.describe()}: log-likelihood is infinite",
                determinant=determinant,
                data_fit=df,
                complexity_penalty=cp,
                constant_term=ct,
            )
        return value

    def _derivative_blocks(self, model, n):
        D = self._fetch_derivative_kernel_stack(model)
        return split_derivative_blocks(D, n)

    def _fetch_value_inputs(self, model):
        Y = self._fetch_labels(model)
        C, determinant = self._fetch_core_matrix_and_determinant(model)
        _check_labels(Y, C)
        alpha = gnp.matmul(C, Y)
        return Y, C, alpha, determinant

    def evaluate(self, model):
        Y, C, alpha, determinant = self._fetch_value_inputs(model)
        return self._value(Y, C, alpha, determinant)

    def parameter_derivatives(self, model):
        _, C, alpha, _ = self._fetch_value_inputs(model)
        blocks = self._derivative_blocks(model, C.shape[0])
        _logger.debug(
            "%s: gradient over %d parameters", self.describe(), blocks.shape[0]
        )
        return 0.5 * trace_of_products(gnp.matmul(alpha, alpha.T) - C, blocks)

    def value_and_parameter_derivatives(self, model):
        Y, C, alpha, determinant = self._fetch_value_inputs(model)
        value = self._value(Y, C, alpha, determinant)

        blocks = self._derivative_blocks(model, C.shape[0])
        delta = 0.5 * trace_of_products(gnp.matmul(alpha, alpha.T) - C, blocks)
        return value, delta

    def value_and_jacobian(self, model):
        Y, C, alpha, determinant = self._fetch_value_inputs(model)
        value = self._value(Y, C, alpha, determinant)

        blocks = self._derivative_blocks(model, C.shape[0])
        _logger.debug(
            "%s: jacobian of %d outputs over %d parameters",
            self.describe(),
            Y.shape[1],
            blocks.shape[0],
        )
        jacobian = 0.5 * per_output_trace_of_products(alpha, C, blocks)
        return value, jacobian

    def describe(self):
        return "LogLikelihood"


PLAIN_LIKELIHOOD = PlainLikelihood()
LOG_LIKELIHOOD = LogLikelihood()

_LIKELIHOODS = {
    "plain": PLAIN_LIKELIHOOD,
    "log": LOG_LIKELIHOOD,
    "PlainLikelihood": PLAIN_LIKELIHOOD,
    "LogLikelihood": LOG_LIKELIHOOD,
}


def get_likelihood(kind):
    """Return the likelihood strategy named `kind`.

    Parameters
    ----------
    kind : {'plain', 'log', 'PlainLikelihood', 'LogLikelihood'}

    Returns
    -------
    Likelihood
    """
    try:
        return _LIKELIHOODS[kind]
    except KeyError:
        raise ValueError(
            f"Unknown likelihood {kind!r}. Available: {list(_LIKELIHOODS.keys())}"
        ) from None
