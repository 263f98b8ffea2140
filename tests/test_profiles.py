"""
Tests for traveller profiles and quiz scoring.
"""

from datetime import datetime, timezone

import numpy as np
import pytest

from traitmatch.profiles import (
    BudgetPreference,
    PersonalityProfile,
    TravelerProfile,
    calculate_personality_profile,
    classify_personality_type,
    describe_traits,
)


def _profile(energy=50, social=50, adventure=50, risk=50, **kwargs):
    return PersonalityProfile(
        energy_level=energy,
        social_preference=social,
        adventure_style=adventure,
        risk_tolerance=risk,
        **kwargs
    )


class TestPersonalityProfile:
    """Profile validation and serialisation."""

    def test_valid_profile(self):
        """In-range values are stored as floats."""
        profile = _profile(energy=70)
        assert profile.energy_level == 70.0
        assert profile.planning_style is None

    @pytest.mark.parametrize("bad", [-1, 101, float("nan"), "50", None, True])
    def test_invalid_trait(self, bad):
        """Out-of-range or non-numeric traits raise ValueError."""
        with pytest.raises(ValueError):
            _profile(social=bad)

    def test_invalid_planning_style(self):
        """planning_style is validated when given."""
        with pytest.raises(ValueError):
            _profile(planning_style=150)

    def test_naive_timestamp_becomes_utc(self):
        """Naive timestamps are treated as UTC."""
        profile = _profile(calculated_at=datetime(2026, 1, 1))
        assert profile.calculated_at.tzinfo == timezone.utc

    def test_iso_timestamp_parsed(self):
        """ISO strings are parsed into datetimes."""
        profile = _profile(calculated_at="2026-01-01T00:00:00+00:00")
        assert profile.calculated_at == datetime(2026, 1, 1, tzinfo=timezone.utc)

    def test_zulu_timestamp_parsed(self):
        """A trailing Z is read as UTC."""
        profile = _profile(calculated_at="2026-05-30T00:00:00Z")
        assert profile.calculated_at == datetime(2026, 5, 30, tzinfo=timezone.utc)

    def test_round_trip(self):
        """to_dict output rebuilds an equal profile."""
        profile = _profile(planning_style=30, personality_type="The Curious Traveler")
        assert PersonalityProfile.from_dict(profile.to_dict()) == profile


class TestTravelerProfile:
    """Traveller record coercion."""

    def test_string_budget_coerced(self):
        """Budget strings become BudgetPreference members."""
        traveler = TravelerProfile("u1", _profile(), "luxury")
        assert traveler.budget_preference is BudgetPreference.LUXURY

    def test_unknown_budget(self):
        """Unknown budgets raise ValueError."""
        with pytest.raises(ValueError):
            TravelerProfile("u1", _profile(), "lavish")

    def test_dict_personality(self):
        """A personality dict is converted to PersonalityProfile."""
        traveler = TravelerProfile.from_dict({
            "user_id": "u1",
            "personality": {"energy_level": 10, "social_preference": 20,
                            "adventure_style": 30, "risk_tolerance": 40},
        })
        assert isinstance(traveler.personality, PersonalityProfile)
        assert traveler.budget_preference is BudgetPreference.MODERATE

    def test_missing_personality_allowed(self):
        """Travellers without a completed quiz have no personality."""
        traveler = TravelerProfile("u1", None)
        assert traveler.to_dict()["personality"] is None


class TestCalculatePersonalityProfile:
    """Quiz answer aggregation."""

    def test_empty_answers(self):
        """No answers raises ValueError."""
        with pytest.raises(ValueError):
            calculate_personality_profile([])

    def test_well_measured_trait_kept(self):
        """Traits with 3+ answers keep their mean."""
        answers = [{"trait_scores": {"energy_level": v}} for v in (80, 90, 100)]
        profile = calculate_personality_profile(answers)
        assert profile.energy_level == 90

    def test_single_answer_shrinks_towards_midpoint(self):
        """One answer gives confidence 5/6."""
        profile = calculate_personality_profile([{"trait_scores": {"risk_tolerance": 80}}])
        # 80 * 5/6 + 50 * 1/6 = 75
        assert profile.risk_tolerance == 75

    def test_unmeasured_traits_default_to_midpoint(self):
        """Traits no answer touched score 50."""
        profile = calculate_personality_profile([{"trait_scores": {"energy_level": 90}}])
        assert profile.social_preference == 50
        assert profile.adventure_style == 50

    def test_out_of_range_mean_clamped(self):
        """Means outside [0, 100] are clamped first."""
        answers = [{"trait_scores": {"adventure_style": 150}} for _ in range(3)]
        assert calculate_personality_profile(answers).adventure_style == 100

    def test_non_numeric_and_unknown_ignored(self):
        """Non-numeric scores, unknown traits and answers without scores are skipped."""
        answers = [
            {"trait_scores": {"energy_level": "high", "mystery": 10}},
            {"question": "skipped"},
            {"trait_scores": {"energy_level": 20}},
            {"trait_scores": {"energy_level": 20}},
            {"trait_scores": {"energy_level": 20}},
        ]
        assert calculate_personality_profile(answers).energy_level == 20

    def test_numpy_scores_counted(self):
        """numpy integer contributions count like plain numbers."""
        answers = [{"trait_scores": {"energy_level": np.int64(90)}} for _ in range(3)]
        assert calculate_personality_profile(answers).energy_level == 90

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), np.float64("nan")])
    def test_non_finite_scores_skipped(self, bad):
        """Non-finite contributions are ignored, leaving the midpoint default."""
        profile = calculate_personality_profile([{"trait_scores": {"energy_level": bad}}])
        assert profile.energy_level == 50

    def test_non_finite_score_does_not_dilute_others(self):
        """Finite contributions alongside a NaN keep their mean."""
        answers = [{"trait_scores": {"risk_tolerance": v}} for v in (60, float("nan"), 60, 60)]
        assert calculate_personality_profile(answers).risk_tolerance == 60

    def test_timestamp_and_type(self):
        """now sets calculated_at and the archetype is classified."""
        now = datetime(2026, 3, 1, tzinfo=timezone.utc)
        answers = [{"trait_scores": {"energy_level": 50, "social_preference": 50,
                                     "adventure_style": 50, "risk_tolerance": 50}}] * 3
        profile = calculate_personality_profile(answers, now=now)
        assert profile.calculated_at == now
        assert profile.personality_type == "The Balanced Wanderer"


class TestClassifyPersonalityType:
    """Archetype rules."""

    @pytest.mark.parametrize("traits,expected", [
        ((80, 80, 80, 80), "The Thrill Seeker"),
        ((30, 30, 30, 30), "The Comfort Traveler"),
        ((70, 30, 70, 50), "The Solo Explorer"),
        ((40, 80, 50, 50), "The Social Butterfly"),
        ((60, 60, 80, 80), "The Adventurer"),
        ((50, 80, 30, 30), "The Group Planner"),
        ((50, 50, 50, 50), "The Balanced Wanderer"),
        ((30, 65, 50, 30), "The Leisure Socializer"),
        ((90, 50, 20, 90), "The Curious Traveler"),
    ])
    def test_archetypes(self, traits, expected):
        """Each rule maps to its archetype."""
        assert classify_personality_type(_profile(*traits)) == expected


class TestDescribeTraits:
    """Static trait descriptions."""

    def test_levels(self):
        """High, medium and low bands pick different text."""
        descriptions = describe_traits(_profile(energy=80, social=50, adventure=10, risk=41))
        assert "high-energy" in descriptions["energy_level"]
        assert "both social" in descriptions["social_preference"]
        assert "well-known" in descriptions["adventure_style"]
        assert "reasonable safety" in descriptions["risk_tolerance"]
