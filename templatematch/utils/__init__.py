"""Linear-algebra helpers for 2D matrices."""

from .linear_algebra import (
    PrecisionRoundingRule,
    ShapeMismatchError,
    as_matrix,
    max_value,
    mean,
    mean_centered,
    multiply_elementwise,
    norm,
    rescale_to_01,
    round_decimal,
    sum_all,
)

__all__ = [
    "PrecisionRoundingRule",
    "ShapeMismatchError",
    "as_matrix",
    "max_value",
    "mean",
    "mean_centered",
    "multiply_elementwise",
    "norm",
    "rescale_to_01",
    "round_decimal",
    "sum_all",
]
