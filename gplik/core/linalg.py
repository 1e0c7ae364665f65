# gplik/core/linalg.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Linear-algebra utilities shared by the likelihood strategies.

These helpers avoid forming matrix products whose result is only
needed through its diagonal or its trace.
"""
import gplik.num as gnp
from gplik.errors import DimensionError


def diag_quadratic_forms(Y, CY):
    """Return diag(Yᵀ C Y) given Y and the product C Y.

    Parameters
    ----------
    Y : array_like, shape (n, t)
    CY : array_like, shape (n, t)
        C @ Y, usually already needed elsewhere (alpha).

    Returns
    -------
    q : array_like, shape (t,)
        q[i] = Y[:, i]ᵀ C Y[:, i].

    Notes
    -----
    Only the t diagonal entries are computed, not the (t, t) product.
    """
    return gnp.einsum("ji,ji->i", Y, CY)


def split_derivative_blocks(D, n):
    """Reshape the stacked derivative kernel matrix into p square blocks.

    Parameters
    ----------
    D : array_like, shape (p*n, n)
        Vertically stacked ∂K/∂θ_k blocks.
    n : int
        Number of training points (order of the core matrix).

    Returns
    -------
    blocks : array_like, shape (p, n, n)
        blocks[k] is the k-th n x n block of D.

    Raises
    ------
    DimensionError
        If D is not 2D, if its number of columns is not n, or if its
        number of rows is not an exact multiple of its number of columns.
    """
    if D.ndim != 2:
        raise DimensionError("derivative kernel matrix must be 2D", D.shape)
    rows, cols = D.shape
    if cols == 0:
        raise DimensionError("derivative kernel matrix is empty", D.shape)
    if rows % cols != 0:
        raise DimensionError(
            "derivative kernel matrix has inconsistent shape", D.shape
        )
    if cols != n:
        raise DimensionError(
            f"derivative kernel matrix blocks must be {n} x {n}", D.shape
        )
    p = rows // cols
    return gnp.reshape(D, (p, cols, cols))


def trace_of_products(A, blocks):
    """Return trace(A @ B_k) for every block B_k.

    Computed as sum_ij A_ij (B_k)_ji, without forming A @ B_k.

    Parameters
    ----------
    A : array_like, shape (n, n)
    blocks : array_like, shape (p, n, n)

    Returns
    -------
    array_like, shape (p,)
    """
    return gnp.einsum("ij,kji->k", A, blocks)


def per_output_trace_of_products(alpha, C, blocks):
    """Return trace((α_i α_iᵀ - C) @ B_k) for every output i and block k.

    Parameters
    ----------
    alpha : array_like, shape (n, t)
        C @ Y.
    C : array_like, shape (n, n)
    blocks : array_like, shape (p, n, n)

    Returns
    -------
    array_like, shape (t, p)

    Notes
    -----
    trace(α αᵀ B) = αᵀ Bᵀ α, so the rank-one matrix α_i α_iᵀ is never
    formed; the C part does not depend on i and is computed once.
    """
    fit = gnp.einsum("ji,klj,li->ik", alpha, blocks, alpha)
    penalty = trace_of_products(C, blocks)
    return fit - penalty[None, :]
