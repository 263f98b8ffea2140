"""
Personality profile calculation from quiz answers.

Each answer may contribute scores to one or more traits. A trait's score is
the mean of its contributions, clamped to [0, 100] and then pulled towards
the midpoint when few questions measured it:

    confidence = min(1, count / 3 + 0.5)
    score = mean * confidence + 50 * (1 - confidence)

Traits that no answer touched default to 50.
"""

import logging
import math
import numbers
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Optional

import pandas as pd

from .schema import QUIZ_TRAITS, TRAIT_MAX, TRAIT_MIN, PersonalityProfile

logger = logging.getLogger(__name__)

MIDPOINT = 50.0
DEFAULT_PERSONALITY_TYPE = "The Curious Traveler"


def _collect_contributions(answers: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Flatten answers into a (trait, score) table of finite numeric contributions."""
    rows = []
    for answer in answers:
        trait_scores = answer.get("trait_scores") or {}
        for trait, score in trait_scores.items():
            if trait not in QUIZ_TRAITS or isinstance(score, bool) or not isinstance(score, numbers.Real):
                continue
            if not math.isfinite(score):
                logger.warning(f"Skipping non-finite {trait} contribution: {score}")
                continue
            rows.append({"trait": trait, "score": float(score)})
    return pd.DataFrame(rows, columns=["trait", "score"]).astype({"score": float})


def calculate_personality_profile(
    answers,
    now: Optional[datetime] = None
) -> PersonalityProfile:
    """
    Calculate a personality profile from quiz answers.

    Args:
        answers: Sequence of answers, each a mapping with a "trait_scores"
            mapping of trait name to numeric contribution
        now: Timestamp for calculated_at (default: current UTC time)

    Returns:
        PersonalityProfile with rounded trait scores and archetype label

    Raises:
        ValueError: If no answers are provided
    """
    answers = list(answers or [])
    if not answers:
        raise ValueError("No answers provided for calculation")

    contributions = _collect_contributions(answers)
    grouped = contributions.groupby("trait")["score"].agg(["mean", "count"])

    scores: Dict[str, float] = {}
    for trait in QUIZ_TRAITS:
        if trait in grouped.index:
            mean = float(grouped.loc[trait, "mean"])
            count = int(grouped.loc[trait, "count"])
        else:
            mean, count = MIDPOINT, 0

        clamped = min(TRAIT_MAX, max(TRAIT_MIN, mean))
        confidence = min(1.0, count / 3 + 0.5)
        # half-up rounding
        scores[trait] = math.floor(clamped * confidence + MIDPOINT * (1 - confidence) + 0.5)

    logger.debug(f"Calculated trait scores from {len(answers)} answers: {scores}")

    if now is not None:
        profile = PersonalityProfile(**scores, calculated_at=now)
    else:
        profile = PersonalityProfile(**scores)
    profile.personality_type = classify_personality_type(profile)
    return profile


def classify_personality_type(profile: PersonalityProfile) -> str:
    """Map a profile to a traveller archetype. First matching rule wins."""
    energy = profile.energy_level
    social = profile.social_preference
    adventure = profile.adventure_style
    risk = profile.risk_tolerance

    if energy > 70 and social > 70 and adventure > 70 and risk > 70:
        return "The Thrill Seeker"
    if energy < 40 and social < 40 and adventure < 40 and risk < 40:
        return "The Comfort Traveler"
    if energy > 60 and social < 40 and adventure > 60:
        return "The Solo Explorer"
    if energy < 50 and social > 70 and 40 < adventure < 70:
        return "The Social Butterfly"
    if adventure > 70 and risk > 70 and energy > 50:
        return "The Adventurer"
    if social > 70 and risk < 40 and 40 < energy < 70:
        return "The Group Planner"
    if all(40 < v < 70 for v in (energy, social, adventure, risk)):
        return "The Balanced Wanderer"
    if energy > 70 and adventure > 70 and social < 40:
        return "The Active Soloist"
    if energy < 40 and social > 60 and risk < 40:
        return "The Leisure Socializer"
    return DEFAULT_PERSONALITY_TYPE


TRAIT_DESCRIPTIONS = {
    "energy_level": (
        "You thrive on high-energy activities and packed itineraries",
        "You enjoy a balanced mix of activity and relaxation",
        "You prefer a relaxed pace with plenty of downtime",
    ),
    "social_preference": (
        "You love traveling with groups and meeting new people",
        "You enjoy both social activities and personal time",
        "You prefer solo adventures or intimate travel experiences",
    ),
    "adventure_style": (
        "You seek out unique, off-the-beaten-path experiences",
        "You like a mix of popular sights and hidden gems",
        "You prefer well-known destinations and comfortable experiences",
    ),
    "risk_tolerance": (
        "You're eager to try thrilling and adventurous activities",
        "You're open to new experiences with reasonable safety",
        "You prefer safe, well-planned activities with minimal risk",
    ),
}


def describe_traits(profile: PersonalityProfile) -> Dict[str, str]:
    """Static description per trait, split at >70 (high) and >40 (medium)."""
    descriptions = {}
    for trait, (high, medium, low) in TRAIT_DESCRIPTIONS.items():
        value = getattr(profile, trait)
        if value > 70:
            descriptions[trait] = high
        elif value > 40:
            descriptions[trait] = medium
        else:
            descriptions[trait] = low
    return descriptions
