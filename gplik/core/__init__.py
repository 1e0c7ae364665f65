# gplik/core/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Core components of the gplik package.

This subpackage contains the likelihood strategies, the model accessor
contract they read through, a dense reference Gaussian process model,
and supporting linear algebra utilities.

Public API
----------
Likelihood, PlainLikelihood, LogLikelihood : classes
    Likelihood strategies.
PLAIN_LIKELIHOOD, LOG_LIKELIHOOD : Likelihood
    Shared strategy instances.
get_likelihood : function
    Strategy lookup by name.
ModelAccessor : class
    Contract between the strategies and a GP model.
GaussianProcess : class
    Dense reference implementation of ModelAccessor.
"""

from .likelihood import (
    OPERATIONS,
    Likelihood,
    PlainLikelihood,
    LogLikelihood,
    PLAIN_LIKELIHOOD,
    LOG_LIKELIHOOD,
    get_likelihood,
)
from .model import ModelAccessor, GaussianProcess

__all__ = [
    "OPERATIONS",
    "Likelihood",
    "PlainLikelihood",
    "LogLikelihood",
    "PLAIN_LIKELIHOOD",
    "LOG_LIKELIHOOD",
    "get_likelihood",
    "ModelAccessor",
    "GaussianProcess",
]
