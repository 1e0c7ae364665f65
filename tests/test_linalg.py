import numpy as np
import pytest

from gplik.core.linalg import (
    diag_quadratic_forms,
    split_derivative_blocks,
    trace_of_products,
    per_output_trace_of_products,
)
from gplik.errors import DimensionError


def _random(shape, seed=0):
    return np.random.default_rng(seed).standard_normal(shape)


def test_diag_quadratic_forms():
    Y = _random((4, 3))
    C = _random((4, 4), 1)
    np.testing.assert_allclose(diag_quadratic_forms(Y, C @ Y), np.diag(Y.T @ C @ Y))


def test_split_derivative_blocks():
    D = np.arange(18.0).reshape(6, 3)
    blocks = split_derivative_blocks(D, 3)
    assert blocks.shape == (2, 3, 3)
    np.testing.assert_array_equal(blocks[1], D[3:])


@pytest.mark.parametrize("shape", [(7, 3), (2, 3), (4,), (0, 0)])
def test_split_derivative_blocks_rejects(shape):
    with pytest.raises(DimensionError):
        split_derivative_blocks(np.zeros(shape), 3)


def test_trace_of_products():
    A = _random((4, 4))
    blocks = _random((3, 4, 4), 2)
    expected = [np.trace(A @ B) for B in blocks]
    np.testing.assert_allclose(trace_of_products(A, blocks), expected)


def test_per_output_trace_of_products():
    alpha = _random((4, 2))
    C = _random((4, 4), 3)
    blocks = _random((3, 4, 4), 4)
    result = per_output_trace_of_products(alpha, C, blocks)
    assert result.shape == (2, 3)
    for i in range(2):
        a = alpha[:, i : i + 1]
        for k in range(3):
            expected = np.trace((a @ a.T - C) @ blocks[k])
            assert result[i, k] == pytest.approx(expected)
