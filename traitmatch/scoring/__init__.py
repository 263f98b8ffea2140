"""Trait compatibility scoring: step curves and adventure type weights."""

from .trait_matrix import (
    AdventureType,
    InvalidTraitValue,
    StepCurve,
    TraitDimension,
    UnknownDimension,
    adventure_type_weight,
    score_dimension,
)
from .batch import score_dimension_batch, score_pairs_frame

__all__ = [
    "AdventureType",
    "InvalidTraitValue",
    "StepCurve",
    "TraitDimension",
    "UnknownDimension",
    "adventure_type_weight",
    "score_dimension",
    "score_dimension_batch",
    "score_pairs_frame",
]
