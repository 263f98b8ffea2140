"""
Score summaries and curve sanity checks.

There are no ground-truth compatibility labels, so evaluation is limited to:
1. Score distribution analysis over scored pairs
2. Invariant checks on the trait curves (symmetry, range, complementarity bump)
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional

import numpy as np
import pandas as pd

from ..scoring.batch import score_dimension_batch
from ..scoring.trait_matrix import AdventureType, TraitDimension

logger = logging.getLogger(__name__)

DEFAULT_QUANTILES = (0.1, 0.25, 0.5, 0.75, 0.9)

# Dimensions where a small difference outscores a near-identical pair
BUMP_DIMENSIONS = {
    # dimension: (near-identical diff, small diff)
    TraitDimension.ADVENTURE: (3, 10),
    TraitDimension.PLANNING: (5, 15),
}


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    count: int
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 0.2, "p50": 0.5, "p90": 0.8}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": int(self.count),
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class CurveInvariantReport:
    """Results of the trait curve invariant checks."""
    n_checked: int
    symmetry_violations: int = 0
    range_violations: int = 0
    bump_violations: List[str] = field(default_factory=list)

    @property
    def n_violations(self) -> int:
        return self.symmetry_violations + self.range_violations + len(self.bump_violations)

    @property
    def passed(self) -> bool:
        return self.n_violations == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_checked": int(self.n_checked),
            "symmetry_violations": int(self.symmetry_violations),
            "range_violations": int(self.range_violations),
            "bump_violations": list(self.bump_violations),
            "passed": self.passed
        }


def compute_score_distribution_stats(
    scores,
    quantiles=DEFAULT_QUANTILES
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Array of compatibility scores
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance

    Raises:
        ValueError: If scores is empty
    """
    scores = np.asarray(scores, dtype=float)
    if scores.size == 0:
        raise ValueError("Cannot compute distribution of empty scores")

    quantile_dict = {
        f"p{int(round(q * 100))}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        count=int(scores.size),
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def check_curve_invariants(step: int = 5, low: int = -20, high: int = 120) -> CurveInvariantReport:
    """
    Sweep a value grid through every dimension and adventure type.

    Checks that scores are symmetric and within [0, 1] on the grid
    (out-of-range values included), and that the bump dimensions score a
    small difference strictly above a near-identical pair.

    Args:
        step: Grid spacing
        low: Lowest grid value
        high: Highest grid value (inclusive)

    Returns:
        CurveInvariantReport
    """
    grid = np.arange(low, high + 1, step, dtype=float)
    a, b = np.meshgrid(grid, grid)
    a, b = a.ravel(), b.ravel()

    report = CurveInvariantReport(n_checked=0)
    for dim in TraitDimension:
        for adventure_type in [None] + list(AdventureType):
            forward = score_dimension_batch(dim, a, b, adventure_type)
            backward = score_dimension_batch(dim, b, a, adventure_type)
            report.n_checked += len(forward)
            report.symmetry_violations += int(np.sum(forward != backward))
            report.range_violations += int(np.sum((forward < 0) | (forward > 1)))

    for dim, (near_diff, small_diff) in BUMP_DIMENSIONS.items():
        near, small = score_dimension_batch(dim, [50.0, 50.0], [50.0 + near_diff, 50.0 + small_diff])
        if not near < small:
            report.bump_violations.append(
                f"{dim.value}: diff={near_diff} scored {near}, diff={small_diff} scored {small}"
            )

    if report.passed:
        logger.info(f"Curve invariants hold over {report.n_checked} checks")
    else:
        logger.warning(f"Curve invariant violations: {report.to_dict()}")
    return report


def create_scoring_report(
    pairs_frame: pd.DataFrame,
    score_columns: Optional[List[str]] = None,
    quantiles=DEFAULT_QUANTILES
) -> Dict[str, Any]:
    """
    Summarise the score columns of a scored pairs table.

    Args:
        pairs_frame: Table of scored pairs
        score_columns: Columns to summarise (default: "score" and every "*_score" column)
        quantiles: Quantiles to compute

    Returns:
        Dictionary with the pair count and per-column distribution stats
    """
    if score_columns is None:
        score_columns = [
            c for c in pairs_frame.columns if c == "score" or str(c).endswith("_score")
        ]

    report: Dict[str, Any] = {"n_pairs": int(len(pairs_frame)), "scores": {}}
    for column in score_columns:
        values = pairs_frame[column].dropna().to_numpy()
        if values.size == 0:
            logger.warning(f"No values to summarise in column {column}")
            continue
        report["scores"][column] = compute_score_distribution_stats(values, quantiles).to_dict()

    if "has_conflicts" in pairs_frame.columns:
        report["conflict_rate"] = float(pairs_frame["has_conflicts"].mean()) if len(pairs_frame) else 0.0

    return report
