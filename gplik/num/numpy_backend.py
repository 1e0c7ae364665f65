# gplik/num/numpy_backend.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""NumPy numerical backend for gplik.

This module defines the NumPy/SciPy implementation of the gplik.num API.
Arrays are created in the working dtype selected in `gplik.config`;
determinants are carried in `numpy.longdouble`.
"""

from gplik.config import get_config

_config = get_config()


# -----------------------------------------------------
#
#                      NUMPY
#
# -----------------------------------------------------

import numpy
from numpy import (
    reshape,
    isfinite,
    vstack,
    stack,
    concatenate,
    sqrt,
    exp,
    log,
    sin,
    sum,
    einsum,
    matmul,
)
from numpy.linalg import LinAlgError
from numpy import pi
from numpy import finfo, longdouble
from scipy.linalg import cho_factor, cho_solve

# ..................................................


def working_dtype():
    """Return the NumPy floating type selected in the configuration."""
    return numpy.dtype(_config.dtype).type


def machine_eps():
    """Machine epsilon of the working dtype."""
    return finfo(working_dtype()).eps


def smallest_positive():
    """Smallest positive normal number of the working dtype."""
    return finfo(working_dtype()).tiny


def high_precision_limits():
    """Return (tiny, max) of the high-precision type used for determinants."""
    info = finfo(longdouble)
    return info.tiny, info.max


# ..................................................


def array(x, dtype=None):
    return numpy.array(x, dtype=working_dtype() if dtype is None else dtype)


def asarray(x, dtype=None):
    if dtype is not None:
        return numpy.asarray(x, dtype=dtype)
    out = numpy.asarray(x)
    if numpy.issubdtype(out.dtype, numpy.floating) or numpy.issubdtype(
        out.dtype, numpy.integer
    ):
        return out.astype(working_dtype(), copy=False)
    return out


def as_high_precision(x):
    """Convert a scalar to the high-precision type used for determinants."""
    return longdouble(x)


def zeros(shape, dtype=None):
    return numpy.zeros(shape, dtype=working_dtype() if dtype is None else dtype)


def ones(shape, dtype=None):
    return numpy.ones(shape, dtype=working_dtype() if dtype is None else dtype)


def eye(n, m=None, k=0, dtype=None):
    return numpy.eye(n, M=m, k=k, dtype=working_dtype() if dtype is None else dtype)


def linspace(start, stop, num=50, endpoint=True, dtype=None):
    return numpy.linspace(
        start,
        stop,
        num=num,
        endpoint=endpoint,
        dtype=working_dtype() if dtype is None else dtype,
    )


def to_scalar(x):
    return numpy.asarray(x).item()


# ..................................................


def sqeuclidean_by_dimension(x, y, invrho):
    """Return the (d, nx, ny) array of squared scaled coordinate differences.

    Entry [j, a, b] is ``(invrho[j] * (x[a, j] - y[b, j]))**2``.
    """
    xs = invrho * x
    ys = invrho * y
    diff = xs.T[:, :, None] - ys.T[:, None, :]
    return diff * diff


# ..................................................


def cholesky_factor(A):
    """Lower Cholesky factor of A; raises numpy.linalg.LinAlgError on failure."""
    L, _ = cho_factor(A, lower=True, check_finite=True)
    return numpy.tril(L)


def cholesky_inv(L):
    """Return A^{-1} given the lower Cholesky factor L of A."""
    n = L.shape[0]
    return cho_solve((L, True), eye(n))


def determinant_from_cholesky(L):
    """det(A) = prod(diag(L))**2 evaluated in high precision.

    Computed as exp(2 * sum(log(diag(L)))) in longdouble so that large
    matrices do not overflow the working dtype before the likelihood
    applies its own clamping.
    """
    d = numpy.diag(L).astype(longdouble)
    return numpy.exp(2 * numpy.sum(numpy.log(d)))
