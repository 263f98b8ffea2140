"""
Command-line runner for traveller compatibility scoring.

Usage:
    python -m traitmatch.run --config configs/config.yaml --profiles profiles.csv

The runner performs the following steps:
1. Load and validate configuration
2. Load traveller profiles
3. Enumerate traveller pairs (sampled above group.max_pairs)
4. Score each pair with the personality matcher
5. Write the per-pair score table and summary
6. Optionally run group analysis over all travellers
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, List, Optional

import pandas as pd

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def score_travelers(
    travelers,
    matcher,
    max_pairs: Optional[int] = None,
    random_seed: Optional[int] = None,
    now: Optional[datetime] = None
) -> pd.DataFrame:
    """
    Score traveller pairs into a table.

    Args:
        travelers: List of TravelerProfile
        matcher: PersonalityMatcher
        max_pairs: Cap on scored pairs
        random_seed: Seed for pair sampling
        now: Reference time for profile staleness

    Returns:
        DataFrame with one row per pair: user_a, user_b, score, adventure_type,
        has_conflicts, conflicts, confidence and one "<component>_score"
        column per personality component
    """
    from .matching import enumerate_pairs

    indices_a, indices_b = enumerate_pairs(len(travelers), max_pairs, random_seed)

    rows: List[Dict[str, Any]] = []
    for i, j in zip(indices_a, indices_b):
        result = matcher.match(travelers[i], travelers[j], now=now)
        row = {
            "user_a": travelers[i].user_id,
            "user_b": travelers[j].user_id,
            "score": result.score,
            "adventure_type": result.adventure_type.value,
            "has_conflicts": result.has_conflicts,
            "conflicts": ";".join(result.conflicts),
            "confidence": result.confidence,
        }
        for component, value in result.breakdown.items():
            row[f"{component}_score"] = value
        rows.append(row)

    logger.info(f"Scored {len(rows)} pairs")
    return pd.DataFrame(rows)


def run_scoring(
    config_path: str,
    profiles_path: str,
    output_path: Optional[str] = None,
    summary_path: Optional[str] = None,
    group: bool = False,
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Run pairwise compatibility scoring over a profiles file.

    Args:
        config_path: Path to the configuration YAML file
        profiles_path: Path to the traveller profiles CSV
        output_path: If provided, write the per-pair score table here (CSV)
        summary_path: If provided, write the scoring report here (JSON)
        group: Also run group analysis over all travellers
        now: Reference time for profile staleness

    Returns:
        Dictionary with the scored pairs table, report and (optional) group analysis
    """
    # Import modules here to keep CLI startup light
    from .configs import get_config_value, load_config, validate_config
    from .data_loading import load_profiles_data, profiles_from_frame
    from .evaluation import create_scoring_report
    from .matching import GroupConfig, MatchingConfig, PersonalityMatcher, analyze_group

    logger.info("=" * 60)
    logger.info("TRAVELLER COMPATIBILITY SCORING")
    logger.info("=" * 60)

    config = load_config(config_path)
    for issue in validate_config(config):
        logger.warning(f"Config issue: {issue}")

    setup_logging(get_config_value(config, "global.log_level", "INFO"))

    matcher = PersonalityMatcher(MatchingConfig.from_config(config))
    group_config = GroupConfig.from_config(config)
    group_config.validate()

    travelers = profiles_from_frame(load_profiles_data(profiles_path))
    if len(travelers) < 2:
        raise ValueError(f"Need at least 2 travellers to score pairs, got {len(travelers)}")

    pairs = score_travelers(
        travelers, matcher,
        max_pairs=group_config.max_pairs,
        random_seed=group_config.random_seed,
        now=now
    )

    report = create_scoring_report(pairs)
    overall = report["scores"]["score"]
    logger.info(
        f"Match score: mean={overall['mean']:.3f}, std={overall['std']:.3f}, "
        f"p50={overall['quantiles']['p50']:.3f}"
    )
    logger.info(f"Conflict rate: {report.get('conflict_rate', 0.0):.1%}")

    if output_path:
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        pairs.to_csv(output_path, index=False)
        logger.info(f"Wrote pair scores to {output_path}")

    result: Dict[str, Any] = {"success": True, "pairs": pairs, "report": report}

    if group:
        analysis = analyze_group(travelers, matcher, group_config, now=now)
        result["group"] = analysis.to_dict()
        logger.info(f"Weakest pair: {analysis.weakest_pair}")
        logger.info(f"Strongest pair: {analysis.strongest_pair}")

    if summary_path:
        summary = {"report": report}
        if "group" in result:
            summary["group"] = result["group"]
        Path(summary_path).parent.mkdir(parents=True, exist_ok=True)
        with open(summary_path, "w") as f:
            json.dump(summary, f, indent=2)
        logger.info(f"Wrote summary to {summary_path}")

    return result


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the scoring runner."""
    parser = argparse.ArgumentParser(
        description="Score personality compatibility between travellers"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--profiles",
        type=str,
        required=True,
        help="Path to traveller profiles CSV"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output CSV for per-pair scores"
    )
    parser.add_argument(
        "--summary",
        type=str,
        default=None,
        help="Output JSON for the scoring report"
    )
    parser.add_argument(
        "--group",
        action="store_true",
        help="Also run group analysis over all travellers"
    )

    args = parser.parse_args(argv)

    try:
        result = run_scoring(
            args.config,
            args.profiles,
            output_path=args.output,
            summary_path=args.summary,
            group=args.group
        )
        if result["success"]:
            logger.info("Scoring completed successfully")
            return 0
        logger.error("Scoring failed")
        return 1
    except Exception as e:
        logger.exception(f"Scoring failed with error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
