"""Linear-algebra primitives for template matching.

This module provides the small set of matrix operations the matching engine
is composed from:
- Elementwise product, summation and Frobenius norm
- Max scan, mean and mean-centering
- Rescaling of 8-bit intensity values into [0, 1]
- Decimal rounding with a selectable precision tier

All functions operate on 2D float64 arrays (shape (H, W)) and, apart from
``as_matrix``, never modify their input.
"""

import logging
import math
from enum import IntEnum
from typing import Union

import numpy as np

logger = logging.getLogger(__name__)

MatrixLike = Union[np.ndarray, list, tuple]


class ShapeMismatchError(ValueError):
    """Raised when the search space and template do not have the same size."""


class PrecisionRoundingRule(IntEnum):
    """Number of decimal digits kept by ``round_decimal``."""

    ZEROS = 0
    ONES = 1
    TWOS = 2
    THREES = 3
    FOURS = 4
    FIVES = 5
    SIXES = 6


def as_matrix(arr: MatrixLike) -> np.ndarray:
    """Convert input to a 2D float64 matrix.

    A writeable float64 ndarray is returned as-is (no copy), so in-place updates
    on the result are visible to the caller. Anything else, including read-only
    arrays such as memory maps or broadcast views, is copied into a new array.

    Args:
        arr: Nested sequence or array of shape (H, W)

    Returns:
        Matrix of shape (H, W) and dtype float64
    """
    matrix = np.asarray(arr, dtype=np.float64)
    if not matrix.flags.writeable:
        matrix = matrix.copy()
    if matrix.ndim != 2:
        raise ValueError(f"Expected a 2D matrix, got array with shape {matrix.shape}")
    return matrix


def check_same_shape(array1: np.ndarray, array2: np.ndarray) -> None:
    """Raise ShapeMismatchError unless both matrices have the same (H, W)."""
    if array1.shape != array2.shape:
        logger.debug(f"Shape mismatch: {array1.shape} vs {array2.shape}")
        raise ShapeMismatchError(
            f"Search space and template must have same size, "
            f"got {array1.shape} and {array2.shape}"
        )


def multiply_elementwise(array1: MatrixLike, array2: MatrixLike) -> np.ndarray:
    """Element-wise multiplication of two matrices.

    Args:
        array1: Matrix of shape (H, W)
        array2: Matrix of shape (H, W)

    Returns:
        New matrix with ``result[i, j] = array1[i, j] * array2[i, j]``
    """
    a = as_matrix(array1)
    b = as_matrix(array2)
    check_same_shape(a, b)
    return a * b


def sum_all(arr: MatrixLike, init_result: float = 0.0) -> float:
    """Sum of all elements of a matrix, seeded with ``init_result``."""
    return float(init_result + as_matrix(arr).sum())


def norm(arr: MatrixLike) -> float:
    """Frobenius norm: square root of the sum of all squared elements."""
    return math.sqrt(sum_all(multiply_elementwise(arr, arr)))


def max_value(arr: MatrixLike) -> float:
    """Maximum element of a matrix, or 0.0 if the matrix is empty."""
    matrix = as_matrix(arr)
    if matrix.size == 0:
        return 0.0
    return float(matrix.max())


def mean(arr: MatrixLike) -> float:
    """Mean of all element values of a matrix.

    An empty matrix has a mean of nan (numpy emits a RuntimeWarning).
    """
    matrix = as_matrix(arr)
    return float(np.divide(sum_all(matrix), matrix.size))


def mean_centered(arr: MatrixLike) -> np.ndarray:
    """Return a new matrix with the matrix mean subtracted from every element."""
    matrix = as_matrix(arr)
    return matrix - mean(matrix)


def rescale_to_01(arr: MatrixLike) -> np.ndarray:
    """Return a new matrix with every element divided by 255.

    Assumes 8-bit intensity input, so the result lies within [0, 1].
    """
    return as_matrix(arr) / 255.0


def round_decimal(
    value: float,
    precision: PrecisionRoundingRule = PrecisionRoundingRule.ZEROS,
) -> float:
    """Round a value to a fixed number of decimal digits.

    Halves are rounded away from zero (``0.005`` -> ``0.01`` at two digits),
    unlike Python's built-in ``round`` which rounds halves to even.

    Args:
        value: The value to be rounded
        precision: Rounding rule, i.e. the number of decimal digits (0-6)

    Returns:
        Rounded value
    """
    precision = PrecisionRoundingRule(precision)
    if math.isnan(value) or math.isinf(value):
        return value

    scale = 10.0 ** int(precision)
    scaled = abs(value) * scale
    rounded = math.floor(scaled)
    if scaled - rounded >= 0.5:
        rounded += 1
    return math.copysign(rounded, value) / scale
