"""CLI script for scoring a search space against a template.

This script handles:
1. Loading both matrices from .npy or delimited text files
2. Running the selected matching formulas on the pair
3. Logging the rounded scores and optionally saving them as JSON
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import yaml

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from templatematch.matching.template_matcher import TemplateMatchingAlgorithm
from templatematch.pipeline import parse_algorithm, score_pair
from templatematch.utils.linear_algebra import PrecisionRoundingRule

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file."""
    with open(config_path, 'r') as f:
        return yaml.safe_load(f) or {}


def load_matrix(path: Path, delimiter: Optional[str] = None) -> np.ndarray:
    """Load a 2D matrix from a .npy file or a delimited text file."""
    if path.suffix == ".npy":
        matrix = np.load(path)
    else:
        matrix = np.loadtxt(path, delimiter=delimiter, ndmin=2)
    logger.debug(f"Loaded {path.name} with shape {matrix.shape}")
    return matrix


def run_scoring(
    search_path: Path,
    template_path: Path,
    config: Dict[str, Any],
    precision: Optional[int] = None,
    algorithm_names: Optional[List[str]] = None,
    output_path: Optional[Path] = None,
) -> Dict[str, float]:
    """Score one pair of matrix files and report the results."""
    scoring_cfg = config.get("scoring", {})
    loading_cfg = config.get("loading", {})

    if precision is None:
        precision = scoring_cfg.get("precision", int(PrecisionRoundingRule.SIXES))
    names = algorithm_names or scoring_cfg.get("algorithms") or []
    algorithms = [parse_algorithm(name) for name in names] or None

    delimiter = loading_cfg.get("delimiter")
    search_space = load_matrix(search_path, delimiter)
    template = load_matrix(template_path, delimiter)

    results = score_pair(
        search_space,
        template,
        precision=PrecisionRoundingRule(precision),
        algorithms=algorithms,
    )

    logger.info(f"Scores for {search_path.name} vs {template_path.name}:")
    for label, score in results.items():
        direction = "lower" if TemplateMatchingAlgorithm(label).lower_is_better else "higher"
        logger.info(f"  {label}: {score} ({direction} is better)")

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(
                {
                    "search_space": str(search_path),
                    "template": str(template_path),
                    "precision": int(precision),
                    "scores": results,
                },
                f,
                indent=2,
            )
        logger.info(f"Saved scores to {output_path}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Template Matching Scores")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(__file__).parent.parent / "configs" / "config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--search",
        type=Path,
        required=True,
        help="Search space matrix (.npy or delimited text)"
    )
    parser.add_argument(
        "--template",
        type=Path,
        required=True,
        help="Template matrix (.npy or delimited text), same size as the search space"
    )
    parser.add_argument(
        "--precision",
        type=int,
        choices=range(0, 7),
        help="Decimal digits kept in the scores. Overrides config."
    )
    parser.add_argument(
        "--algorithm",
        action="append",
        help="Algorithm to report (e.g. TM_CCORR_NORMED). Repeatable. Overrides config."
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional JSON file for the scores"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = load_config(args.config)

    try:
        run_scoring(
            search_path=args.search,
            template_path=args.template,
            config=config,
            precision=args.precision,
            algorithm_names=args.algorithm,
            output_path=args.output,
        )
    except ValueError as e:
        logger.error(f"Scoring failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
