"""
Personality compatibility between two travellers.

Combines the per-dimension trait scores into one match score:

1. Detect the pair's adventure type from their traits and budgets
2. Short-circuit to a fixed low score on hard trait conflicts
3. Adjust the base dimension weights for the adventure type
4. Score each component with the trait matrices
5. Take the weighted mean and scale it by profile confidence

Planning style is optional on a profile. When either side lacks it, risk
tolerance stands in for it.
"""

import logging
import numbers
from dataclasses import dataclass, asdict, field
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional

from ..profiles.schema import QUIZ_TRAITS, BudgetPreference, PersonalityProfile, TravelerProfile
from ..scoring.trait_matrix import (
    AdventureType,
    StepCurve,
    TraitDimension,
    clamp_score,
    score_dimension,
)

logger = logging.getLogger(__name__)

DEFAULT_PERSONALITY_WEIGHTS = {
    "energy_level": 0.2,
    "social_preference": 0.2,
    "adventure_style": 0.2,
    "risk_tolerance": 0.2,
    "planning_style": 0.2,
}

# Multipliers on the base weights; types not listed keep the base weights
ADVENTURE_WEIGHT_ADJUSTMENTS: Dict[AdventureType, Dict[str, float]] = {
    AdventureType.EXTREME_SPORTS: {
        "risk_tolerance": 1.5,
        "adventure_style": 1.3,
        "energy_level": 1.2,
        "social_preference": 1.0,
        "planning_style": 0.8,
    },
    AdventureType.CULTURAL_IMMERSION: {
        "social_preference": 1.3,
        "planning_style": 1.2,
        "adventure_style": 1.0,
        "energy_level": 1.0,
        "risk_tolerance": 0.8,
    },
    AdventureType.LUXURY_TRAVEL: {
        "planning_style": 1.4,
        "risk_tolerance": 0.7,
        "social_preference": 1.1,
        "energy_level": 0.9,
        "adventure_style": 0.8,
    },
}

PLANNING_CRITICAL_TYPES = frozenset({AdventureType.LUXURY_TRAVEL, AdventureType.FAMILY_FRIENDLY})
PLANNING_CRITICAL_BOOST = 1.2

HIGH_ENERGY_TYPES = frozenset({AdventureType.EXTREME_SPORTS, AdventureType.BUDGET_BACKPACKING})
HIGH_ENERGY_CURVE = StepCurve(thresholds=(15, 30), scores=(0.95, 0.75, 0.4))

CONFLICT_RECOMMENDATION = (
    "Significant personality conflicts detected. Consider group dynamics carefully."
)


class MissingProfileError(ValueError):
    """Raised when a traveller has no personality profile to compare."""


@dataclass
class MatchingConfig:
    """
    Configuration for personality matching.

    Attributes:
        personality_weights: Base weight per component before adjustment
        conflict_score: Score returned when a hard conflict is detected
        min_confidence: Floor for the confidence factor
        stale_after_days: Profile age that starts reducing confidence
        very_stale_after_days: Profile age that reduces confidence further
    """
    personality_weights: Dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_PERSONALITY_WEIGHTS)
    )
    conflict_score: float = 0.15
    min_confidence: float = 0.5
    stale_after_days: float = 90
    very_stale_after_days: float = 180

    def validate(self) -> None:
        """Validate configuration values."""
        unknown = set(self.personality_weights) - set(DEFAULT_PERSONALITY_WEIGHTS)
        if unknown:
            raise ValueError(f"Unknown personality weight keys: {sorted(unknown)}")
        non_numeric = [
            k for k, w in self.personality_weights.items()
            if isinstance(w, bool) or not isinstance(w, numbers.Real)
        ]
        if non_numeric:
            raise ValueError(f"Personality weights must be numbers: {sorted(non_numeric)}")
        if any(w < 0 for w in self.personality_weights.values()):
            raise ValueError("Personality weights must be non-negative")
        if sum(self.personality_weights.values()) <= 0:
            raise ValueError("Personality weights must not all be zero")
        if not 0 <= self.conflict_score <= 1:
            raise ValueError(f"conflict_score must be in [0, 1], got {self.conflict_score}")
        if not 0 <= self.min_confidence <= 1:
            raise ValueError(f"min_confidence must be in [0, 1], got {self.min_confidence}")
        if self.very_stale_after_days < self.stale_after_days:
            raise ValueError("very_stale_after_days must not be below stale_after_days")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MatchingConfig":
        """Create from dictionary."""
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "MatchingConfig":
        """Create from main config dictionary."""
        matching_config = config.get("matching") or {}
        weights = dict(DEFAULT_PERSONALITY_WEIGHTS)
        weights.update(matching_config.get("personality_weights") or {})

        return cls(
            personality_weights=weights,
            conflict_score=matching_config.get("conflict_score", 0.15),
            min_confidence=matching_config.get("min_confidence", 0.5),
            stale_after_days=matching_config.get("stale_after_days", 90),
            very_stale_after_days=matching_config.get("very_stale_after_days", 180)
        )


@dataclass
class PersonalityMatchResult:
    """
    Result of matching two travellers.

    Attributes:
        score: Final personality compatibility [0, 1]
        adventure_type: Adventure type detected for the pair
        breakdown: Unweighted component scores [0, 1] (empty on conflict)
        adjusted_weights: Component weights after adventure adjustment
        confidence: Confidence factor applied to the raw score
        conflicts: Names of detected hard conflicts
        recommendation: Guidance text when conflicts are present
    """
    score: float
    adventure_type: AdventureType
    breakdown: Dict[str, float] = field(default_factory=dict)
    adjusted_weights: Dict[str, float] = field(default_factory=dict)
    confidence: float = 1.0
    conflicts: List[str] = field(default_factory=list)
    recommendation: Optional[str] = None

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {
            "score": self.score,
            "adventure_type": self.adventure_type.value,
            "has_conflicts": self.has_conflicts,
            "conflicts": list(self.conflicts),
            "confidence": self.confidence,
        }
        if self.breakdown:
            result["breakdown"] = dict(self.breakdown)
            result["adjusted_weights"] = dict(self.adjusted_weights)
        if self.recommendation:
            result["recommendation"] = self.recommendation
        return result


def _planning_values(p1: PersonalityProfile, p2: PersonalityProfile):
    if p1.planning_style is not None and p2.planning_style is not None:
        return p1.planning_style, p2.planning_style
    return p1.risk_tolerance, p2.risk_tolerance


def detect_adventure_type(traveler_a: TravelerProfile, traveler_b: TravelerProfile) -> AdventureType:
    """
    Infer the kind of trip that suits a pair.

    Rules are checked in order; cultural immersion is the fallback.
    """
    p1, p2 = traveler_a.personality, traveler_b.personality
    avg_risk = (p1.risk_tolerance + p2.risk_tolerance) / 2
    avg_adventure = (p1.adventure_style + p2.adventure_style) / 2
    budgets = (traveler_a.budget_preference, traveler_b.budget_preference)

    if avg_risk > 80 and avg_adventure > 80:
        return AdventureType.EXTREME_SPORTS
    if BudgetPreference.LUXURY in budgets:
        return AdventureType.LUXURY_TRAVEL
    if all(b == BudgetPreference.BUDGET for b in budgets):
        return AdventureType.BUDGET_BACKPACKING
    if avg_risk < 30 and avg_adventure < 40:
        return AdventureType.FAMILY_FRIENDLY
    if avg_adventure < 30:
        return AdventureType.WELLNESS_RETREAT
    return AdventureType.CULTURAL_IMMERSION


def detect_trait_conflicts(p1: PersonalityProfile, p2: PersonalityProfile) -> List[str]:
    """Return the hard conflicts between two personalities, if any."""
    conflicts = []

    # Extreme introvert with extreme extrovert
    social_lo, social_hi = sorted((p1.social_preference, p2.social_preference))
    if social_hi - social_lo > 80 and social_lo < 20 and social_hi > 80:
        conflicts.append("extreme_social_mismatch")

    # Two adventurers with opposite planning styles
    if p1.adventure_style > 70 and p2.adventure_style > 70:
        plan1, plan2 = _planning_values(p1, p2)
        if abs(plan1 - plan2) > 75:
            conflicts.append("planning_adventure_conflict")

    # Risk-averse with thrill-seeker on an adventurous trip
    risk_lo, risk_hi = sorted((p1.risk_tolerance, p2.risk_tolerance))
    if risk_lo < 25 and risk_hi > 75:
        if p1.adventure_style > 60 or p2.adventure_style > 60:
            conflicts.append("risk_adventure_conflict")

    return conflicts


class PersonalityMatcher:
    """
    Scores personality compatibility between travellers.

    Stateless apart from its configuration; safe to share across threads.

    Attributes:
        config: MatchingConfig with weights and confidence settings
    """

    def __init__(self, config: Optional[MatchingConfig] = None):
        """
        Initialize the matcher.

        Args:
            config: MatchingConfig instance (default settings if None)
        """
        self.config = config or MatchingConfig()
        self.config.validate()
        logger.info(
            f"Initialized PersonalityMatcher with conflict_score={self.config.conflict_score}, "
            f"min_confidence={self.config.min_confidence}"
        )

    def match(
        self,
        traveler_a: TravelerProfile,
        traveler_b: TravelerProfile,
        now: Optional[datetime] = None
    ) -> PersonalityMatchResult:
        """
        Compute personality compatibility for a pair of travellers.

        Args:
            traveler_a: First traveller
            traveler_b: Second traveller
            now: Reference time for profile staleness (default: current UTC time)

        Returns:
            PersonalityMatchResult with score in [0, 1]

        Raises:
            MissingProfileError: If either traveller has no personality profile
        """
        p1, p2 = traveler_a.personality, traveler_b.personality
        if p1 is None or p2 is None:
            raise MissingProfileError(
                "Personality profiles required for personality dimension scoring"
            )

        adventure_type = detect_adventure_type(traveler_a, traveler_b)

        conflicts = detect_trait_conflicts(p1, p2)
        if conflicts:
            logger.debug(
                f"Conflicts between {traveler_a.user_id} and {traveler_b.user_id}: {conflicts}"
            )
            return PersonalityMatchResult(
                score=self.config.conflict_score,
                adventure_type=adventure_type,
                conflicts=conflicts,
                recommendation=CONFLICT_RECOMMENDATION
            )

        weights = self.adjusted_weights(adventure_type)
        breakdown = self.component_scores(p1, p2, adventure_type)

        total_weight = sum(weights.values())
        raw_score = sum(breakdown[k] * weights[k] for k in weights) / total_weight

        confidence = self.trait_confidence(p1, p2, now=now)
        score = clamp_score(raw_score * confidence)

        return PersonalityMatchResult(
            score=score,
            adventure_type=adventure_type,
            breakdown=breakdown,
            adjusted_weights=weights,
            confidence=confidence
        )

    def adjusted_weights(self, adventure_type: AdventureType) -> Dict[str, float]:
        """Scale the base weights by the adventure type's adjustments."""
        adjustment = ADVENTURE_WEIGHT_ADJUSTMENTS.get(adventure_type, {})
        return {
            key: weight * adjustment.get(key, 1.0)
            for key, weight in self.config.personality_weights.items()
        }

    def component_scores(
        self,
        p1: PersonalityProfile,
        p2: PersonalityProfile,
        adventure_type: AdventureType
    ) -> Dict[str, float]:
        """Unweighted compatibility of each personality component, all in [0, 1]."""
        plan1, plan2 = _planning_values(p1, p2)
        planning = score_dimension(TraitDimension.PLANNING, plan1, plan2, adventure_type)
        if adventure_type in PLANNING_CRITICAL_TYPES:
            planning = clamp_score(planning * PLANNING_CRITICAL_BOOST)

        return {
            "social_preference": score_dimension(
                TraitDimension.SOCIAL, p1.social_preference, p2.social_preference, adventure_type
            ),
            "adventure_style": score_dimension(
                TraitDimension.ADVENTURE, p1.adventure_style, p2.adventure_style, adventure_type
            ),
            "planning_style": planning,
            "risk_tolerance": score_dimension(
                TraitDimension.RISK, p1.risk_tolerance, p2.risk_tolerance, adventure_type
            ),
            "energy_level": self.energy_compatibility(
                p1.energy_level, p2.energy_level, adventure_type
            ),
        }

    @staticmethod
    def energy_compatibility(energy1: float, energy2: float, adventure_type: AdventureType) -> float:
        """High-energy trips need closer energy levels; otherwise use the social curve."""
        if adventure_type in HIGH_ENERGY_TYPES:
            return HIGH_ENERGY_CURVE.score(abs(energy1 - energy2))
        return score_dimension(TraitDimension.SOCIAL, energy1, energy2)

    def trait_confidence(
        self,
        p1: PersonalityProfile,
        p2: PersonalityProfile,
        now: Optional[datetime] = None
    ) -> float:
        """
        Confidence in the pair's trait data.

        Each extreme trait value (<5 or >95) costs 5%. The older of the two
        profiles costs 10% past stale_after_days and a further 15% past
        very_stale_after_days. Never below min_confidence.
        """
        confidence = 1.0

        for value in (getattr(p, attr) for p in (p1, p2) for attr in QUIZ_TRAITS):
            if value < 5 or value > 95:
                confidence *= 0.95

        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        oldest = min(p1.calculated_at, p2.calculated_at)
        days_old = (now - oldest).total_seconds() / 86400

        if days_old > self.config.stale_after_days:
            confidence *= 0.9
        if days_old > self.config.very_stale_after_days:
            confidence *= 0.85

        return max(self.config.min_confidence, confidence)
