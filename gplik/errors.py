# gplik/errors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Exceptions raised by the likelihood strategies and the reference model.

All of them derive from `LikelihoodError`, so an optimizer can treat any
failure as "this hyperparameter point is invalid" with a single except
clause, while tests and callers can still inspect the structured fields.
"""


class LikelihoodError(Exception):
    """Base class for gplik errors."""


class LikelihoodNotImplementedError(LikelihoodError, NotImplementedError):
    """A likelihood was asked for an operation it does not provide.

    Attributes
    ----------
    operation : str
        Name of the requested operation (e.g. ``"parameter_derivatives"``).
    likelihood : str
        Description of the likelihood that was called.
    """

    def __init__(self, operation, likelihood):
        self.operation = operation
        self.likelihood = likelihood
        super().__init__(f"{likelihood}: {operation} is not implemented.")


class NumericalError(LikelihoodError, ArithmeticError):
    """A determinant or likelihood value is outside its valid domain.

    Attributes
    ----------
    reason : str
        Short description of the failure.
    determinant : scalar or None
        det(K + sigma I) as supplied by the model.
    data_fit : array_like or None
        Per-output data-fit term.
    complexity_penalty : scalar or None
        Determinant term of the (log-)likelihood.
    constant_term : scalar or None
        Normalization term of the (log-)likelihood.
    """

    _FIELDS = ("determinant", "data_fit", "complexity_penalty", "constant_term")

    def __init__(
        self,
        reason,
        determinant=None,
        data_fit=None,
        complexity_penalty=None,
        constant_term=None,
    ):
        self.reason = reason
        self.determinant = determinant
        self.data_fit = data_fit
        self.complexity_penalty = complexity_penalty
        self.constant_term = constant_term
        details = ", ".join(f"{k}: {v}" for k, v in self.diagnostics.items())
        super().__init__(f"{reason} ({details})" if details else reason)

    @property
    def diagnostics(self):
        """Dict of the diagnostic fields that were supplied."""
        return {
            k: getattr(self, k) for k in self._FIELDS if getattr(self, k) is not None
        }


class DimensionError(LikelihoodError, ValueError):
    """Matrices supplied by the model have inconsistent shapes.

    Attributes
    ----------
    reason : str
    shape : tuple or None
        Shape of the offending matrix.
    """

    def __init__(self, reason, shape=None):
        self.reason = reason
        self.shape = tuple(shape) if shape is not None else None
        msg = reason if shape is None else f"{reason}: shape {self.shape}"
        super().__init__(msg)
