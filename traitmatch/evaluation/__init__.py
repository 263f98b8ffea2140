"""Evaluation module for compatibility score analysis."""

from .metrics import (
    compute_score_distribution_stats,
    check_curve_invariants,
    create_scoring_report,
    CurveInvariantReport,
    ScoreDistributionStats
)

__all__ = [
    "compute_score_distribution_stats",
    "check_curve_invariants",
    "create_scoring_report",
    "CurveInvariantReport",
    "ScoreDistributionStats"
]
