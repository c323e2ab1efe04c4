"""Template matching scores for a single aligned search space / template pair.

This module implements six classical matching formulas, named after the
``cv2.TM_*`` methods of OpenCV's ``matchTemplate``. Each function scores one
pair of equally-shaped matrices; there is no sliding window.

Every scoring function first auto-normalizes its operands: a matrix whose
maximum element exceeds 1.0 is treated as 8-bit imagery and divided by 255 in
place. The check is applied to each operand independently, so a 0-255 search
space paired with a [0, 1] template only rescales the search space.

Higher is more similar for the cross correlation and correlation coefficient
variants. For the squared difference variants lower is more similar and 0.0
means identical.
"""

import logging
from enum import Enum
from typing import Tuple

import numpy as np

from templatematch.utils.linear_algebra import (
    MatrixLike,
    as_matrix,
    check_same_shape,
    max_value,
    mean_centered,
    multiply_elementwise,
    norm,
    rescale_to_01,
    sum_all,
)

logger = logging.getLogger(__name__)


class TemplateMatchingAlgorithm(Enum):
    """Display labels for the six matching formulas."""

    TM_SQDIFF = "Squared Difference"
    TM_SQDIFF_NORMED = "Normed Squared Difference"
    TM_CCORR = "Cross Correlation"
    TM_CCORR_NORMED = "Normed Cross Correlation"
    TM_CCOEFF = "Correlation Coefficient"
    TM_CCOEFF_NORMED = "Normed Correlation Coefficient"

    @property
    def label(self) -> str:
        return self.value

    @property
    def lower_is_better(self) -> bool:
        """True for the squared difference scores, where 0.0 is a perfect match."""
        return self in (
            TemplateMatchingAlgorithm.TM_SQDIFF,
            TemplateMatchingAlgorithm.TM_SQDIFF_NORMED,
        )


def _normalize_in_place(matrix: np.ndarray, name: str) -> None:
    if max_value(matrix) > 1.0:
        logger.debug(f"Rescaling {name} {matrix.shape} by 1/255")
        matrix[...] = rescale_to_01(matrix)


def auto_normalize(
    search_space: np.ndarray,
    template: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """Scale each operand into [0, 1] if its max element exceeds 1.0.

    Both arrays are modified in place and also returned.

    Args:
        search_space: Search space matrix (float64)
        template: Template matrix (float64)

    Returns:
        Tuple of (search_space, template)
    """
    _normalize_in_place(search_space, "search space")
    _normalize_in_place(template, "template")
    return search_space, template


def _prepare(
    search_space: MatrixLike,
    template: MatrixLike,
) -> Tuple[np.ndarray, np.ndarray]:
    """Convert, check shapes, then auto-normalize."""
    search_space = as_matrix(search_space)
    template = as_matrix(template)
    check_same_shape(search_space, template)
    return auto_normalize(search_space, template)


def cross_correlation(search_space: MatrixLike, template: MatrixLike) -> float:
    """Cross correlation: sum of the elementwise product.

    The higher the more similar two matrices are. Unbounded.

    Args:
        search_space: Region of the image checked against the template
        template: The template for matching

    Returns:
        The similarity value
    """
    search_space, template = _prepare(search_space, template)
    return sum_all(multiply_elementwise(search_space, template))


def normed_cross_correlation(search_space: MatrixLike, template: MatrixLike) -> float:
    """Normed cross correlation, within [-1.0, 1.0].

    The norms are taken after the inner ``cross_correlation`` call has
    rescaled the operands.
    """
    search_space = as_matrix(search_space)
    template = as_matrix(template)
    elem_mul_sum = cross_correlation(search_space, template)
    return float(np.divide(elem_mul_sum, norm(search_space) * norm(template)))


def corr_coef(search_space: MatrixLike, template: MatrixLike) -> float:
    """Correlation coefficient: cross correlation of the mean-centered matrices.

    The higher the more similar two matrices are. Unbounded.
    """
    search_space, template = _prepare(search_space, template)
    # cross_correlation checks shape and rescales again. Centered values of
    # [0, 1] data stay within [-1, 1], so this second pass is normally a no-op.
    return cross_correlation(mean_centered(search_space), mean_centered(template))


def normed_corr_coef(search_space: MatrixLike, template: MatrixLike) -> float:
    """Normed correlation coefficient, nominally within [-1.0, 1.0]."""
    search_space = as_matrix(search_space)
    template = as_matrix(template)
    coef = corr_coef(search_space, template)
    norm_search_space = norm(mean_centered(search_space))
    norm_template = norm(mean_centered(template))
    return float(np.divide(coef, norm_template * norm_search_space))


def sq_diff(search_space: MatrixLike, template: MatrixLike) -> float:
    """Squared difference: sum of squared elementwise differences.

    Lower is more similar; 0.0 means the (normalized) matrices are identical.
    """
    search_space, template = _prepare(search_space, template)
    diff = search_space.ravel() - template.ravel()
    return float(np.sum(diff * diff))


def normed_sq_diff(search_space: MatrixLike, template: MatrixLike) -> float:
    """Squared difference divided by the product of both norms.

    Lower is more similar; 0.0 means identical.
    """
    search_space = as_matrix(search_space)
    template = as_matrix(template)
    score = sq_diff(search_space, template)
    return float(np.divide(score, norm(search_space) * norm(template)))


class TemplateMatcher:
    """Class for template matching.

    Groups the six scoring functions of this module. All methods rescale
    float64 ndarray arguments in place when auto-normalization triggers.
    """

    def cross_correlation(self, search_space: MatrixLike, template: MatrixLike) -> float:
        return cross_correlation(search_space, template)

    def normed_cross_correlation(self, search_space: MatrixLike, template: MatrixLike) -> float:
        return normed_cross_correlation(search_space, template)

    def corr_coef(self, search_space: MatrixLike, template: MatrixLike) -> float:
        return corr_coef(search_space, template)

    def normed_corr_coef(self, search_space: MatrixLike, template: MatrixLike) -> float:
        return normed_corr_coef(search_space, template)

    def sq_diff(self, search_space: MatrixLike, template: MatrixLike) -> float:
        return sq_diff(search_space, template)

    def normed_sq_diff(self, search_space: MatrixLike, template: MatrixLike) -> float:
        return normed_sq_diff(search_space, template)
