"""
Vectorised trait compatibility scoring.

Scores many (A, B) value pairs at once with numpy, using the same curve
tables as the scalar scorer so the two always agree element-wise.
"""

import logging
from typing import Iterable, List, Optional

import numpy as np
import pandas as pd

from .trait_matrix import (
    CURVES,
    NEUTRAL_SCORE,
    WEIGHTED_DIMENSIONS,
    AdventureTypeLike,
    DimensionLike,
    InvalidTraitValue,
    StepCurve,
    TraitDimension,
    UnknownDimension,
    adventure_type_weight,
    resolve_dimension,
)

logger = logging.getLogger(__name__)


def _as_finite_array(values, name: str) -> np.ndarray:
    """Convert to a float array, rejecting non-numeric and non-finite entries."""
    arr = np.asarray(values)
    if arr.dtype == bool or not (
        np.issubdtype(arr.dtype, np.integer) or np.issubdtype(arr.dtype, np.floating)
    ):
        raise InvalidTraitValue(f"{name} must contain real numbers, got dtype {arr.dtype}")
    arr = arr.astype(float)
    if not np.all(np.isfinite(arr)):
        n_bad = int(np.sum(~np.isfinite(arr)))
        raise InvalidTraitValue(f"{name} contains {n_bad} non-finite value(s)")
    return arr


def score_curve_array(curve: StepCurve, diffs: np.ndarray) -> np.ndarray:
    """
    Apply a step curve to an array of differences.

    searchsorted with side="left" puts a diff equal to a threshold in that
    threshold's bucket, matching StepCurve.score.
    """
    idx = np.searchsorted(np.asarray(curve.thresholds, dtype=float), diffs, side="left")
    return np.asarray(curve.scores, dtype=float)[idx]


def score_dimension_batch(
    dimension: DimensionLike,
    values_a,
    values_b,
    adventure_type: AdventureTypeLike = None,
    strict: bool = False
) -> np.ndarray:
    """
    Score equal-length arrays of trait values along one dimension.

    Args:
        dimension: One of social, adventure, planning, risk
        values_a: Trait values for persons A (N,)
        values_b: Trait values for persons B (N,)
        adventure_type: Optional trip category; only affects risk
        strict: Raise UnknownDimension instead of returning 0.5

    Returns:
        Array of compatibility scores in [0, 1] (N,)
    """
    a = _as_finite_array(values_a, "values_a")
    b = _as_finite_array(values_b, "values_b")
    if a.shape != b.shape:
        raise ValueError(f"Value arrays must have same shape: {a.shape} vs {b.shape}")

    resolved = resolve_dimension(dimension)
    if resolved is None:
        if strict:
            raise UnknownDimension(f"No compatibility curve for dimension {dimension!r}")
        return np.full(a.shape, NEUTRAL_SCORE)

    scores = score_curve_array(CURVES[resolved], np.abs(a - b))
    if resolved in WEIGHTED_DIMENSIONS:
        scores = scores * adventure_type_weight(adventure_type, resolved)
    return np.clip(scores, 0.0, 1.0)


def score_pairs_frame(
    frame_a: pd.DataFrame,
    frame_b: pd.DataFrame,
    dimensions: Optional[Iterable[DimensionLike]] = None,
    adventure_type: AdventureTypeLike = None
) -> pd.DataFrame:
    """
    Score aligned rows of two trait tables.

    Row i of frame_a is compared with row i of frame_b. Each dimension is
    read from the column named after its tag.

    Args:
        frame_a: Trait table for persons A
        frame_b: Trait table for persons B
        dimensions: Dimensions to score (default: all that appear in both frames)
        adventure_type: Optional trip category; only affects risk

    Returns:
        DataFrame with one "<dimension>_score" column per dimension,
        indexed like frame_a
    """
    if len(frame_a) != len(frame_b):
        raise ValueError(f"Frames must have same length: {len(frame_a)} vs {len(frame_b)}")

    if dimensions is None:
        dims: List[TraitDimension] = [
            d for d in TraitDimension
            if d.value in frame_a.columns and d.value in frame_b.columns
        ]
    else:
        dims = []
        for dim in dimensions:
            resolved = resolve_dimension(dim)
            if resolved is None:
                raise UnknownDimension(f"No compatibility curve for dimension {dim!r}")
            dims.append(resolved)

    if not dims:
        raise ValueError("No trait dimension columns found to score")

    result = pd.DataFrame(index=frame_a.index)
    for dim in dims:
        result[f"{dim.value}_score"] = score_dimension_batch(
            dim,
            frame_a[dim.value].to_numpy(),
            frame_b[dim.value].to_numpy(),
            adventure_type=adventure_type
        )

    logger.debug(f"Scored {len(result)} pairs on {[d.value for d in dims]}")
    return result
