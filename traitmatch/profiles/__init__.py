"""Traveller profiles and quiz-based personality calculation."""

from .schema import BudgetPreference, PersonalityProfile, TravelerProfile
from .calculator import calculate_personality_profile, classify_personality_type, describe_traits

__all__ = [
    "BudgetPreference",
    "PersonalityProfile",
    "TravelerProfile",
    "calculate_personality_profile",
    "classify_personality_type",
    "describe_traits",
]
