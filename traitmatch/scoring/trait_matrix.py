"""
Trait compatibility matrices.

This module maps the difference between two values of the same personality
trait to a compatibility score in [0, 1].

Each dimension owns a step curve over diff = |value_a - value_b|. A value
that lands exactly on a threshold belongs to the closer bucket.

Curves:
    social:    <=10: 1.0,  <=25: 0.85, <=40: 0.65, <=60: 0.4,  else 0.2
    adventure: <=5:  0.85, <=15: 0.9,  <=30: 0.75, <=50: 0.5,  else 0.25
    planning:  <=8:  0.8,  <=20: 0.9,  <=35: 0.7,  <=55: 0.45, else 0.2
    risk:      <=10: 0.95, <=25: 0.8,  <=40: 0.6,  <=60: 0.35, else 0.15

Adventure and planning are not monotonic: a small difference scores above a
near-identical pair (complementarity bump). Risk is further multiplied by the
adventure type weight and clamped back into [0, 1].

Unrecognised dimensions score a neutral 0.5 unless strict=True, in which
case UnknownDimension is raised.
"""

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

NEUTRAL_SCORE = 0.5
NEUTRAL_WEIGHT = 1.0


class InvalidTraitValue(ValueError):
    """Raised when a trait value is not a finite real number."""


class UnknownDimension(ValueError):
    """Raised in strict mode for a dimension with no compatibility curve."""


class TraitDimension(Enum):
    """Personality dimensions with a compatibility curve."""
    SOCIAL = "social"
    ADVENTURE = "adventure"
    PLANNING = "planning"
    RISK = "risk"


class AdventureType(Enum):
    """Trip categories used to reweight trait compatibility."""
    EXTREME_SPORTS = "extreme-sports"
    CULTURAL_IMMERSION = "cultural-immersion"
    LUXURY_TRAVEL = "luxury-travel"
    BUDGET_BACKPACKING = "budget-backpacking"
    FAMILY_FRIENDLY = "family-friendly"
    WELLNESS_RETREAT = "wellness-retreat"


@dataclass(frozen=True)
class StepCurve:
    """
    Piecewise-constant score over an absolute difference.

    Attributes:
        thresholds: Ascending inclusive upper bounds of each bucket
        scores: One score per threshold plus a final catch-all score
    """
    thresholds: Tuple[float, ...]
    scores: Tuple[float, ...]

    def __post_init__(self):
        if len(self.scores) != len(self.thresholds) + 1:
            raise ValueError(
                f"StepCurve needs {len(self.thresholds) + 1} scores, got {len(self.scores)}"
            )
        if list(self.thresholds) != sorted(self.thresholds):
            raise ValueError("StepCurve thresholds must be ascending")

    def score(self, diff: float) -> float:
        """Score a single non-negative difference."""
        for threshold, score in zip(self.thresholds, self.scores):
            if diff <= threshold:
                return score
        return self.scores[-1]


SOCIAL_CURVE = StepCurve(thresholds=(10, 25, 40, 60), scores=(1.0, 0.85, 0.65, 0.4, 0.2))
ADVENTURE_CURVE = StepCurve(thresholds=(5, 15, 30, 50), scores=(0.85, 0.9, 0.75, 0.5, 0.25))
PLANNING_CURVE = StepCurve(thresholds=(8, 20, 35, 55), scores=(0.8, 0.9, 0.7, 0.45, 0.2))
RISK_CURVE = StepCurve(thresholds=(10, 25, 40, 60), scores=(0.95, 0.8, 0.6, 0.35, 0.15))

CURVES: Dict[TraitDimension, StepCurve] = {
    TraitDimension.SOCIAL: SOCIAL_CURVE,
    TraitDimension.ADVENTURE: ADVENTURE_CURVE,
    TraitDimension.PLANNING: PLANNING_CURVE,
    TraitDimension.RISK: RISK_CURVE,
}

# Dimensions whose score is multiplied by the adventure type weight
WEIGHTED_DIMENSIONS = frozenset({TraitDimension.RISK})

ADVENTURE_TYPE_WEIGHTS: Dict[AdventureType, Dict[TraitDimension, float]] = {
    AdventureType.EXTREME_SPORTS: {
        TraitDimension.RISK: 1.3, TraitDimension.ADVENTURE: 1.2,
        TraitDimension.PLANNING: 0.9, TraitDimension.SOCIAL: 1.0,
    },
    AdventureType.CULTURAL_IMMERSION: {
        TraitDimension.RISK: 0.8, TraitDimension.ADVENTURE: 0.9,
        TraitDimension.PLANNING: 1.2, TraitDimension.SOCIAL: 1.1,
    },
    AdventureType.LUXURY_TRAVEL: {
        TraitDimension.RISK: 0.7, TraitDimension.ADVENTURE: 0.8,
        TraitDimension.PLANNING: 1.3, TraitDimension.SOCIAL: 1.0,
    },
    AdventureType.BUDGET_BACKPACKING: {
        TraitDimension.RISK: 1.1, TraitDimension.ADVENTURE: 1.1,
        TraitDimension.PLANNING: 0.8, TraitDimension.SOCIAL: 1.2,
    },
    AdventureType.FAMILY_FRIENDLY: {
        TraitDimension.RISK: 0.6, TraitDimension.ADVENTURE: 0.7,
        TraitDimension.PLANNING: 1.4, TraitDimension.SOCIAL: 1.0,
    },
    AdventureType.WELLNESS_RETREAT: {
        TraitDimension.RISK: 0.5, TraitDimension.ADVENTURE: 0.6,
        TraitDimension.PLANNING: 1.1, TraitDimension.SOCIAL: 0.9,
    },
}

DimensionLike = Union[TraitDimension, str]
AdventureTypeLike = Optional[Union[AdventureType, str]]


def resolve_dimension(dimension: DimensionLike) -> Optional[TraitDimension]:
    """Return the TraitDimension for a tag, or None if unrecognised."""
    if isinstance(dimension, TraitDimension):
        return dimension
    try:
        return TraitDimension(dimension)
    except ValueError:
        return None


def resolve_adventure_type(adventure_type: AdventureTypeLike) -> Optional[AdventureType]:
    """Return the AdventureType for a tag, or None if absent or unrecognised."""
    if adventure_type is None or isinstance(adventure_type, AdventureType):
        return adventure_type
    try:
        return AdventureType(adventure_type)
    except ValueError:
        return None


def validate_trait_value(value) -> float:
    """
    Check that a trait value is a finite real number.

    Out-of-range values are accepted; only the difference matters.

    Raises:
        InvalidTraitValue: For bools, non-numbers, NaN and infinities
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidTraitValue(f"Trait value must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidTraitValue(f"Trait value must be finite, got {value!r}")
    return value


def clamp_score(score: float) -> float:
    return min(1.0, max(0.0, score))


def adventure_type_weight(adventure_type: AdventureTypeLike, dimension: DimensionLike) -> float:
    """
    Look up the weight an adventure type applies to a dimension.

    Args:
        adventure_type: AdventureType or its tag string; None for no context
        dimension: TraitDimension or its tag string

    Returns:
        Weight from ADVENTURE_TYPE_WEIGHTS, or 1.0 when either key is unknown
    """
    resolved_type = resolve_adventure_type(adventure_type)
    resolved_dim = resolve_dimension(dimension)
    if resolved_type is None or resolved_dim is None:
        return NEUTRAL_WEIGHT
    return ADVENTURE_TYPE_WEIGHTS[resolved_type].get(resolved_dim, NEUTRAL_WEIGHT)


def score_dimension(
    dimension: DimensionLike,
    value1,
    value2,
    adventure_type: AdventureTypeLike = None,
    strict: bool = False
) -> float:
    """
    Compute the compatibility of two values along one trait dimension.

    Args:
        dimension: One of social, adventure, planning, risk
        value1: First person's trait value, nominally in [0, 100]
        value2: Second person's trait value, nominally in [0, 100]
        adventure_type: Optional trip category; only affects risk
        strict: Raise UnknownDimension instead of returning 0.5

    Returns:
        Compatibility score in [0, 1]

    Raises:
        InvalidTraitValue: If either value is not a finite number
        UnknownDimension: If strict and the dimension is not recognised
    """
    value1 = validate_trait_value(value1)
    value2 = validate_trait_value(value2)

    resolved = resolve_dimension(dimension)
    if resolved is None:
        if strict:
            raise UnknownDimension(f"No compatibility curve for dimension {dimension!r}")
        return NEUTRAL_SCORE

    score = CURVES[resolved].score(abs(value1 - value2))
    if resolved in WEIGHTED_DIMENSIONS:
        score *= adventure_type_weight(adventure_type, resolved)
    return clamp_score(score)
