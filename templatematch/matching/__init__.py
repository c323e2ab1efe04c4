"""Template matching scores."""

from .template_matcher import (
    TemplateMatcher,
    TemplateMatchingAlgorithm,
    auto_normalize,
    corr_coef,
    cross_correlation,
    normed_corr_coef,
    normed_cross_correlation,
    normed_sq_diff,
    sq_diff,
)

__all__ = [
    "TemplateMatcher",
    "TemplateMatchingAlgorithm",
    "auto_normalize",
    "corr_coef",
    "cross_correlation",
    "normed_corr_coef",
    "normed_cross_correlation",
    "normed_sq_diff",
    "sq_diff",
]
