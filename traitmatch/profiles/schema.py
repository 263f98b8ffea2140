"""
Traveller profile schema.

Defines the personality profile produced by the quiz and the traveller
record the matcher compares.

Personality traits (0-100):
- energy_level: preferred trip pace
- social_preference: solo (0) to group (100)
- adventure_style: comfort (0) to off-the-beaten-path (100)
- risk_tolerance: cautious (0) to thrill-seeking (100)
- planning_style: optional; spontaneous (0) to fully planned (100)
"""

import math
import numbers
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

TRAIT_MIN = 0.0
TRAIT_MAX = 100.0

QUIZ_TRAITS = ["energy_level", "social_preference", "adventure_style", "risk_tolerance"]


class BudgetPreference(Enum):
    """Travel budget categories."""
    BUDGET = "budget"
    MODERATE = "moderate"
    LUXURY = "luxury"


def _check_trait(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value) or not TRAIT_MIN <= value <= TRAIT_MAX:
        raise ValueError(f"{name} must be between {TRAIT_MIN:g} and {TRAIT_MAX:g}, got {value}")
    return value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PersonalityProfile:
    """
    Personality profile for one traveller.

    Attributes:
        energy_level: Trip pace preference, 0-100
        social_preference: Group vs solo preference, 0-100
        adventure_style: Adventurousness, 0-100
        risk_tolerance: Risk appetite, 0-100
        planning_style: Planning orientation, 0-100 (optional)
        calculated_at: When the profile was computed (timezone-aware)
        personality_type: Archetype label, if classified
    """
    energy_level: float
    social_preference: float
    adventure_style: float
    risk_tolerance: float
    planning_style: Optional[float] = None
    calculated_at: datetime = field(default_factory=_utcnow)
    personality_type: Optional[str] = None

    def __post_init__(self):
        """Validate trait bounds and normalise the timestamp."""
        for attr in QUIZ_TRAITS:
            setattr(self, attr, _check_trait(attr, getattr(self, attr)))
        if self.planning_style is not None:
            self.planning_style = _check_trait("planning_style", self.planning_style)

        if isinstance(self.calculated_at, str):
            # fromisoformat only accepts a "Z" suffix from Python 3.11
            timestamp = self.calculated_at.strip()
            if timestamp.endswith(("Z", "z")):
                timestamp = timestamp[:-1] + "+00:00"
            self.calculated_at = datetime.fromisoformat(timestamp)
        if self.calculated_at.tzinfo is None:
            self.calculated_at = self.calculated_at.replace(tzinfo=timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "energy_level": self.energy_level,
            "social_preference": self.social_preference,
            "adventure_style": self.adventure_style,
            "risk_tolerance": self.risk_tolerance,
            "planning_style": self.planning_style,
            "calculated_at": self.calculated_at.isoformat(),
            "personality_type": self.personality_type
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersonalityProfile":
        """Create from dictionary."""
        return cls(**data)


@dataclass
class TravelerProfile:
    """
    A traveller as seen by the matcher.

    Attributes:
        user_id: Identifier for the traveller
        personality: Quiz-derived personality, None if the quiz is incomplete
        budget_preference: Travel budget category
    """
    user_id: str
    personality: Optional[PersonalityProfile]
    budget_preference: BudgetPreference = BudgetPreference.MODERATE

    def __post_init__(self):
        """Convert dict and string inputs to their typed forms."""
        if isinstance(self.personality, dict):
            self.personality = PersonalityProfile.from_dict(self.personality)
        if isinstance(self.budget_preference, str):
            self.budget_preference = BudgetPreference(self.budget_preference)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "user_id": self.user_id,
            "personality": self.personality.to_dict() if self.personality else None,
            "budget_preference": self.budget_preference.value
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TravelerProfile":
        """Create from dictionary."""
        return cls(
            user_id=data["user_id"],
            personality=data.get("personality"),
            budget_preference=data.get("budget_preference", BudgetPreference.MODERATE.value)
        )
