"""
Tests for score summaries and curve invariant checks.
"""

import pandas as pd
import pytest

from traitmatch.evaluation import (
    check_curve_invariants,
    compute_score_distribution_stats,
    create_scoring_report,
)


class TestScoreDistribution:
    """Distribution statistics."""

    def test_stats(self):
        """Mean, bounds and median are computed."""
        stats = compute_score_distribution_stats([0.2, 0.4, 0.6, 0.8])
        assert stats.count == 4
        assert stats.mean == pytest.approx(0.5)
        assert stats.min == 0.2
        assert stats.max == 0.8
        assert stats.quantiles["p50"] == pytest.approx(0.5)
        assert set(stats.quantiles) == {"p10", "p25", "p50", "p75", "p90"}

    def test_empty(self):
        """Empty input raises ValueError."""
        with pytest.raises(ValueError):
            compute_score_distribution_stats([])


class TestCurveInvariants:
    """Grid sweep over the trait curves."""

    def test_curves_pass(self):
        """The shipped curves satisfy every invariant."""
        report = check_curve_invariants(step=10)
        assert report.passed
        assert report.n_checked > 0
        assert report.to_dict()["passed"] is True


class TestScoringReport:
    """Summaries of scored pair tables."""

    def test_report(self):
        """Score columns are summarised and conflicts counted."""
        frame = pd.DataFrame({
            "score": [0.15, 0.9],
            "social_preference_score": [None, 1.0],
            "has_conflicts": [True, False],
            "user_a": ["a", "b"],
        })
        report = create_scoring_report(frame)
        assert report["n_pairs"] == 2
        assert set(report["scores"]) == {"score", "social_preference_score"}
        assert report["scores"]["social_preference_score"]["count"] == 1
        assert report["conflict_rate"] == 0.5
