"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone

import pytest
import yaml

from traitmatch.profiles import PersonalityProfile, TravelerProfile

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for staleness checks."""
    return NOW


@pytest.fixture
def make_traveler():
    """Factory for travellers with a moderate default personality."""
    def _make(user_id="traveler", budget="moderate", days_old=1, **overrides):
        traits = {
            "energy_level": 70,
            "social_preference": 65,
            "adventure_style": 75,
            "risk_tolerance": 60,
        }
        traits.update(overrides)
        personality = PersonalityProfile(
            calculated_at=NOW - timedelta(days=days_old),
            **traits
        )
        return TravelerProfile(
            user_id=user_id,
            personality=personality,
            budget_preference=budget
        )
    return _make


@pytest.fixture
def config_dict():
    """Valid configuration dictionary."""
    return {
        "global": {"log_level": "INFO"},
        "matching": {
            "personality_weights": {
                "energy_level": 0.2,
                "social_preference": 0.2,
                "adventure_style": 0.2,
                "risk_tolerance": 0.2,
                "planning_style": 0.2,
            },
            "conflict_score": 0.15,
            "min_confidence": 0.5,
        },
        "group": {"max_pairs": 1000, "random_seed": 7},
    }


@pytest.fixture
def config_file(tmp_path, config_dict):
    """Config YAML written to a temporary file."""
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(config_dict))
    return path


@pytest.fixture
def profiles_csv(tmp_path):
    """Small traveller profiles CSV."""
    path = tmp_path / "profiles.csv"
    path.write_text(
        "user_id,energy_level,social_preference,adventure_style,risk_tolerance,"
        "planning_style,budget_preference,calculated_at\n"
        "u1,70,65,60,55,,moderate,2026-05-30T00:00:00+00:00\n"
        "u2,75,70,65,60,40,moderate,2026-05-30T00:00:00+00:00\n"
        "u3,30,5,85,20,,budget,2026-05-30T00:00:00+00:00\n"
        "u4,60,95,80,90,,luxury,2026-05-30T00:00:00+00:00\n"
    )
    return path
