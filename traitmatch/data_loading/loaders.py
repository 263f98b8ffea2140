"""
Data loading functions for traveller profiles.

Profiles are read from a CSV with one row per traveller:
- user_id (required)
- energy_level, social_preference, adventure_style, risk_tolerance (required, 0-100)
- planning_style (optional, 0-100; blank cells allowed)
- budget_preference (optional: budget, moderate, luxury)
- calculated_at (optional, ISO-8601 timestamp)
"""

import logging
from pathlib import Path
from typing import List

import pandas as pd

from ..profiles.schema import QUIZ_TRAITS, BudgetPreference, PersonalityProfile, TravelerProfile

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["user_id"] + QUIZ_TRAITS


def load_profiles_data(filepath: str, delimiter: str = ",") -> pd.DataFrame:
    """
    Load traveller profiles table from CSV.

    Args:
        filepath: Path to the profiles CSV file
        delimiter: Field delimiter (default: comma)

    Returns:
        DataFrame with raw profile rows

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or required columns are missing
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Profiles file not found: {filepath}")

    logger.info(f"Loading profiles from {filepath} (delimiter: {repr(delimiter)})")
    df = pd.read_csv(path, sep=delimiter, dtype={"user_id": str})

    if df.empty:
        raise ValueError(f"Profiles file is empty: {filepath}")

    missing = validate_profile_columns(df)
    if missing:
        raise ValueError(f"Profiles file is missing columns: {missing}")

    if df["user_id"].duplicated().any():
        dupes = df.loc[df["user_id"].duplicated(), "user_id"].tolist()
        raise ValueError(f"Duplicate user_id values in profiles file: {dupes}")

    logger.info(f"Loaded {len(df)} profiles with {len(df.columns)} columns")
    return df


def validate_profile_columns(df: pd.DataFrame) -> List[str]:
    """
    Check that the required profile columns are present.

    Returns:
        List of missing column names (empty if valid)
    """
    return [c for c in REQUIRED_COLUMNS if c not in df.columns]


def profiles_from_frame(df: pd.DataFrame) -> List[TravelerProfile]:
    """
    Convert profile rows into TravelerProfile objects.

    Raises:
        ValueError: If a row holds an out-of-range trait or unknown budget
    """
    travelers = []
    for row in df.to_dict(orient="records"):
        personality_kwargs = {trait: row[trait] for trait in QUIZ_TRAITS}

        planning = row.get("planning_style")
        if planning is not None and not pd.isna(planning):
            personality_kwargs["planning_style"] = planning

        calculated_at = row.get("calculated_at")
        if isinstance(calculated_at, str) and calculated_at:
            personality_kwargs["calculated_at"] = calculated_at

        budget = row.get("budget_preference")
        if budget is None or (not isinstance(budget, str) and pd.isna(budget)):
            budget = BudgetPreference.MODERATE.value

        try:
            travelers.append(TravelerProfile(
                user_id=str(row["user_id"]),
                personality=PersonalityProfile(**personality_kwargs),
                budget_preference=str(budget).strip().lower()
            ))
        except ValueError as e:
            raise ValueError(f"Invalid profile for user {row['user_id']}: {e}") from e

    return travelers
