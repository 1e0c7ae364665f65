# gplik/kernel/gaussian.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import gplik.num as gnp


def gaussian_kernel(h):
    """Gaussian (squared-exponential) kernel.

    .. math::
        k(h) = \\exp(-h^2 / 2)

    Parameters
    ----------
    h : gnp.array
        Scaled distances between points.

    Returns
    -------
    gnp.array
        Kernel values.
    """
    return gnp.exp(-0.5 * h * h)


def _split_covparam(covparam):
    covparam = gnp.asarray(covparam).reshape(-1)
    if covparam.shape[0] < 2:
        raise ValueError("covparam must be [log(sigma2), log(1/rho_1), ...]")
    return gnp.exp(covparam[0]), gnp.exp(covparam[1:])


def gaussian_covariance(x, y, covparam, pairwise=False):
    """Gaussian covariance with anisotropic length scales.

    .. math::
        K_{ij} = \\sigma^2 \\exp\\left(-\\frac{1}{2}
                 \\sum_k \\frac{(x_{ik} - y_{jk})^2}{\\rho_k^2}\\right)

    Parameters
    ----------
    x : gnp.array, shape (nx, d)
    y : gnp.array, shape (ny, d) or None
        None means y := x.
    covparam : gnp.array, shape (2,) or (1 + d,)
        [log(sigma2), log(1/rho_k)]. A single length scale is shared
        by all dimensions.
    pairwise : bool
        If True, return the vector k(x_i, y_i); else the (nx, ny) matrix.

    Returns
    -------
    gnp.array
        (nx, ny) matrix or (nx,) vector if pairwise.
    """
    sigma2, invrho = _split_covparam(covparam)
    if y is None:
        y = x
    if pairwise:
        if y is x:
            return sigma2 * gnp.ones((x.shape[0],))
        h2 = gnp.sum((invrho * (x - y)) ** 2, axis=1)
        return sigma2 * gnp.exp(-0.5 * h2)
    S = gnp.sqeuclidean_by_dimension(x, y, invrho)
    return sigma2 * gaussian_kernel(gnp.sqrt(gnp.sum(S, axis=0)))


def gaussian_covariance_derivatives(x, covparam):
    """Derivatives of the Gaussian covariance matrix at x w.r.t. covparam.

    Parameters
    ----------
    x : gnp.array, shape (n, d)
    covparam : gnp.array, shape (2,) or (1 + d,)

    Returns
    -------
    dK : gnp.array, shape (len(covparam), n, n)
        dK[0] = ∂K/∂log(sigma2) = K and
        dK[k] = ∂K/∂log(1/rho_k) = -(x_ik - x_jk)^2 / rho_k^2 * K_ij.
    """
    sigma2, invrho = _split_covparam(covparam)
    S = gnp.sqeuclidean_by_dimension(x, x, invrho)  # (d, n, n)
    K = sigma2 * gnp.exp(-0.5 * gnp.sum(S, axis=0))
    if invrho.shape[0] == 1:
        dK_rho = -gnp.sum(S, axis=0, keepdims=True) * K
    else:
        dK_rho = -S * K
    return gnp.concatenate((K[None, :, :], dK_rho), axis=0)
