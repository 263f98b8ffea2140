"""Personality matching for pairs and groups of travellers."""

from .personality import (
    MatchingConfig,
    MissingProfileError,
    PersonalityMatcher,
    PersonalityMatchResult,
    detect_adventure_type,
    detect_trait_conflicts,
)
from .group import GroupCompatibilityAnalysis, GroupConfig, analyze_group, enumerate_pairs

__all__ = [
    "MatchingConfig",
    "MissingProfileError",
    "PersonalityMatcher",
    "PersonalityMatchResult",
    "detect_adventure_type",
    "detect_trait_conflicts",
    "GroupCompatibilityAnalysis",
    "GroupConfig",
    "analyze_group",
    "enumerate_pairs",
]
