"""Data loading module for traveller profiles."""

from .loaders import load_profiles_data, profiles_from_frame, validate_profile_columns

__all__ = ["load_profiles_data", "profiles_from_frame", "validate_profile_columns"]
