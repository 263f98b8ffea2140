"""
Tests for vectorised trait scoring.
"""

import numpy as np
import pandas as pd
import pytest

from traitmatch.scoring import (
    InvalidTraitValue,
    UnknownDimension,
    score_dimension,
    score_dimension_batch,
    score_pairs_frame,
)


class TestScoreDimensionBatch:
    """Array scoring agrees with the scalar scorer."""

    @pytest.mark.parametrize("dimension", ["social", "adventure", "planning", "risk"])
    @pytest.mark.parametrize("tag", [None, "extreme-sports", "family-friendly", "bogus"])
    def test_matches_scalar(self, dimension, tag):
        """Every element equals score_dimension on the same inputs."""
        rng = np.random.RandomState(0)
        a = rng.randint(-10, 111, size=300)
        b = rng.randint(-10, 111, size=300)
        batch = score_dimension_batch(dimension, a, b, tag)
        expected = [score_dimension(dimension, int(x), int(y), tag) for x, y in zip(a, b)]
        np.testing.assert_allclose(batch, expected)

    def test_thresholds_select_lower_bucket(self):
        """Exact threshold diffs use the closer bucket."""
        scores = score_dimension_batch("planning", [0, 0, 0, 0], [8, 9, 20, 21])
        np.testing.assert_allclose(scores, [0.8, 0.9, 0.9, 0.7])

    def test_risk_clamped(self):
        """Weighted risk never exceeds 1.0."""
        scores = score_dimension_batch("risk", [50, 50], [55, 90], "extreme-sports")
        np.testing.assert_allclose(scores, [1.0, 0.35 * 1.3])

    def test_unknown_dimension_neutral(self):
        """Unknown dimensions score 0.5 everywhere."""
        np.testing.assert_allclose(score_dimension_batch("energy", [1, 2], [3, 90]), [0.5, 0.5])

    def test_unknown_dimension_strict(self):
        """Strict mode raises for unknown dimensions."""
        with pytest.raises(UnknownDimension):
            score_dimension_batch("energy", [1], [2], strict=True)

    def test_shape_mismatch(self):
        """Arrays of different length are rejected."""
        with pytest.raises(ValueError):
            score_dimension_batch("social", [1, 2, 3], [1, 2])

    def test_non_finite_rejected(self):
        """NaN anywhere raises InvalidTraitValue."""
        with pytest.raises(InvalidTraitValue):
            score_dimension_batch("social", [1.0, np.nan], [2.0, 3.0])

    def test_non_numeric_rejected(self):
        """Object and string arrays raise InvalidTraitValue."""
        with pytest.raises(InvalidTraitValue):
            score_dimension_batch("social", ["10", "20"], [1, 2])
        with pytest.raises(InvalidTraitValue):
            score_dimension_batch("social", [10, None], [1, 2])

    def test_bool_rejected(self):
        """Boolean arrays are not trait values."""
        with pytest.raises(InvalidTraitValue):
            score_dimension_batch("social", [True, False], [1, 2])


class TestScorePairsFrame:
    """Row-aligned scoring of trait tables."""

    def test_scores_shared_columns(self):
        """All dimensions present in both frames are scored."""
        frame_a = pd.DataFrame({"social": [20, 10], "risk": [80, 10], "name": ["x", "y"]})
        frame_b = pd.DataFrame({"social": [80, 90], "risk": [85, 90]})
        result = score_pairs_frame(frame_a, frame_b, adventure_type="wellness-retreat")

        assert list(result.columns) == ["social_score", "risk_score"]
        np.testing.assert_allclose(result["social_score"], [0.4, 0.2])
        np.testing.assert_allclose(result["risk_score"], [0.95 * 0.5, 0.15 * 0.5])

    def test_explicit_dimensions(self):
        """Only the requested dimensions are scored."""
        frame = pd.DataFrame({"social": [20], "planning": [50]})
        other = pd.DataFrame({"social": [20], "planning": [65]})
        result = score_pairs_frame(frame, other, dimensions=["planning"])
        assert list(result.columns) == ["planning_score"]
        assert result["planning_score"].iloc[0] == 0.9

    def test_unknown_explicit_dimension(self):
        """Requesting an unknown dimension raises."""
        frame = pd.DataFrame({"social": [20]})
        with pytest.raises(UnknownDimension):
            score_pairs_frame(frame, frame, dimensions=["energy"])

    def test_length_mismatch(self):
        """Frames must align row for row."""
        with pytest.raises(ValueError):
            score_pairs_frame(pd.DataFrame({"social": [1, 2]}), pd.DataFrame({"social": [1]}))

    def test_no_dimension_columns(self):
        """Frames without trait columns raise."""
        with pytest.raises(ValueError):
            score_pairs_frame(pd.DataFrame({"a": [1]}), pd.DataFrame({"a": [1]}))

    def test_index_preserved(self):
        """The result is indexed like frame_a."""
        frame_a = pd.DataFrame({"social": [20, 30]}, index=["p", "q"])
        frame_b = pd.DataFrame({"social": [20, 30]}, index=[0, 1])
        result = score_pairs_frame(frame_a, frame_b)
        assert list(result.index) == ["p", "q"]
