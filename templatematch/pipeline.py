"""Score report for one search space / template pair.

This module runs the matching formulas of ``templatematch.matching`` over the
same pair and collects the rounded results keyed by their display label.
Each formula gets its own float64 copies of the inputs, so the in-place
auto-normalization of one formula never affects another and the caller's
matrices are left untouched.
"""

import logging
from typing import Callable, Dict, Iterable, Optional, Tuple

from templatematch.matching.template_matcher import (
    TemplateMatchingAlgorithm,
    corr_coef,
    cross_correlation,
    normed_corr_coef,
    normed_cross_correlation,
    normed_sq_diff,
    sq_diff,
)
from templatematch.utils.linear_algebra import (
    MatrixLike,
    PrecisionRoundingRule,
    as_matrix,
    check_same_shape,
    round_decimal,
)

logger = logging.getLogger(__name__)

# Report-side lookup table pairing each display label with its scoring
# function. The scoring functions are independent of the enum; only the report
# uses this table. Report order follows the enum declaration order.
SCORERS: Tuple[Tuple[TemplateMatchingAlgorithm, Callable[[MatrixLike, MatrixLike], float]], ...] = (
    (TemplateMatchingAlgorithm.TM_SQDIFF, sq_diff),
    (TemplateMatchingAlgorithm.TM_SQDIFF_NORMED, normed_sq_diff),
    (TemplateMatchingAlgorithm.TM_CCORR, cross_correlation),
    (TemplateMatchingAlgorithm.TM_CCORR_NORMED, normed_cross_correlation),
    (TemplateMatchingAlgorithm.TM_CCOEFF, corr_coef),
    (TemplateMatchingAlgorithm.TM_CCOEFF_NORMED, normed_corr_coef),
)


def parse_algorithm(name: str) -> TemplateMatchingAlgorithm:
    """Look up an algorithm by member name (``TM_CCORR``) or label.

    Matching is case-insensitive for member names.
    """
    key = name.strip()
    for algorithm in TemplateMatchingAlgorithm:
        if key.upper() == algorithm.name or key == algorithm.label:
            return algorithm
    valid = ", ".join(a.name for a in TemplateMatchingAlgorithm)
    raise ValueError(f"Unknown matching algorithm: {name}. Must be one of: {valid}")


def score_pair(
    search_space: MatrixLike,
    template: MatrixLike,
    precision: PrecisionRoundingRule = PrecisionRoundingRule.SIXES,
    algorithms: Optional[Iterable[TemplateMatchingAlgorithm]] = None,
) -> Dict[str, float]:
    """Score a pair with several matching formulas.

    Args:
        search_space: Region of the image checked against the template (H, W)
        template: The template for matching (H, W)
        precision: Decimal digits kept in the reported scores
        algorithms: Formulas to run (default: all six)

    Returns:
        Dictionary mapping algorithm label to rounded score, in enum order
    """
    search_space = as_matrix(search_space).copy()
    template = as_matrix(template).copy()
    check_same_shape(search_space, template)

    selected = set(TemplateMatchingAlgorithm if algorithms is None else algorithms)

    results = {}
    for algorithm, scorer in SCORERS:
        if algorithm not in selected:
            continue
        score = scorer(search_space.copy(), template.copy())
        results[algorithm.label] = round_decimal(score, precision)
        logger.debug(f"{algorithm.label}: {score}")

    return results
