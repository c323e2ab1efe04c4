"""Similarity scores between a search space and a template of the same size."""

from .matching import (
    TemplateMatcher,
    TemplateMatchingAlgorithm,
    corr_coef,
    cross_correlation,
    normed_corr_coef,
    normed_cross_correlation,
    normed_sq_diff,
    sq_diff,
)
from .pipeline import score_pair
from .utils import PrecisionRoundingRule, ShapeMismatchError, round_decimal

__all__ = [
    "PrecisionRoundingRule",
    "ShapeMismatchError",
    "TemplateMatcher",
    "TemplateMatchingAlgorithm",
    "corr_coef",
    "cross_correlation",
    "normed_corr_coef",
    "normed_cross_correlation",
    "normed_sq_diff",
    "round_decimal",
    "score_pair",
    "sq_diff",
]

__version__ = "0.1.0"
