# gplik/kernel/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Covariance functions with analytic hyperparameter derivatives.

Modules
-------
gaussian
    Gaussian (squared-exponential) kernel, anisotropic length scales.

Public API
-----------
gaussian_kernel, gaussian_covariance, gaussian_covariance_derivatives
"""

from .gaussian import (
    gaussian_kernel,
    gaussian_covariance,
    gaussian_covariance_derivatives,
)

__all__ = [
    "gaussian_kernel",
    "gaussian_covariance",
    "gaussian_covariance_derivatives",
]
