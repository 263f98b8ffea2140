"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates the matching and group analysis settings.
"""

import logging
import numbers
from pathlib import Path
from typing import Dict, Any, List

import yaml

logger = logging.getLogger(__name__)

PERSONALITY_WEIGHT_KEYS = [
    "energy_level", "social_preference", "adventure_style",
    "risk_tolerance", "planning_style"
]


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is empty
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(path, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    for section in ["global", "matching", "group"]:
        if section not in config:
            issues.append(f"Missing required section: {section}")

    if "matching" in config:
        matching = config["matching"] or {}

        weights = matching.get("personality_weights") or {}
        if not isinstance(weights, dict):
            issues.append(f"matching.personality_weights must be a mapping, got {weights!r}")
            weights = {}
        unknown = sorted(set(weights) - set(PERSONALITY_WEIGHT_KEYS))
        if unknown:
            issues.append(f"Unknown personality weight keys: {unknown}")
        non_numeric = sorted(
            k for k, w in weights.items()
            if isinstance(w, bool) or not isinstance(w, numbers.Real)
        )
        if non_numeric:
            issues.append(f"Personality weights must be numbers: {non_numeric}")
        numeric = {k: w for k, w in weights.items() if k not in non_numeric}
        negative = [k for k, w in numeric.items() if w < 0]
        if negative:
            issues.append(f"Personality weights must be non-negative: {negative}")
        if numeric and sum(numeric.values()) <= 0:
            issues.append("Personality weights must not all be zero")

        conflict_score = matching.get("conflict_score", 0.15)
        if not 0 <= conflict_score <= 1:
            issues.append(f"matching.conflict_score must be in [0, 1], got {conflict_score}")

        min_confidence = matching.get("min_confidence", 0.5)
        if not 0 <= min_confidence <= 1:
            issues.append(f"matching.min_confidence must be in [0, 1], got {min_confidence}")

    if "group" in config:
        max_pairs = (config["group"] or {}).get("max_pairs")
        if max_pairs is not None and max_pairs < 1:
            issues.append(f"group.max_pairs must be positive, got {max_pairs}")

    if "global" in config:
        level = (config["global"] or {}).get("log_level", "INFO")
        if str(level).upper() not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            issues.append(f"Unknown global.log_level: {level}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "matching.conflict_score")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
