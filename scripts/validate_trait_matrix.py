"""
Smoke test for the trait compatibility matrices.

This script validates that:
1. Reference pairs score as expected on every dimension
2. Adventure type weights are looked up correctly
3. Behavioural patterns hold (complementarity bump, extreme mismatch, risk weighting)
4. Curve invariants hold over a value grid

Usage:
    python scripts/validate_trait_matrix.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

REFERENCE_CASES = [
    # (dimension, value1, value2, expected, name)
    ("social", 20, 20, 1.0, "Identical introverts"),
    ("social", 15, 25, 0.85, "Similar introverts"),
    ("social", 20, 80, 0.4, "Introvert vs extrovert"),
    ("social", 10, 90, 0.2, "Extreme social mismatch"),
    ("adventure", 50, 52, 0.85, "Nearly identical adventure"),
    ("adventure", 45, 55, 0.9, "Optimal adventure difference"),
    ("adventure", 40, 65, 0.75, "Moderate adventure difference"),
    ("adventure", 10, 80, 0.25, "Extreme adventure difference"),
    ("planning", 50, 55, 0.8, "Very similar planning"),
    ("planning", 40, 55, 0.9, "Complementary planning"),
    ("planning", 30, 60, 0.7, "Moderate planning difference"),
    ("planning", 5, 95, 0.2, "Extreme planning difference"),
]

WEIGHT_CASES = [
    ("extreme-sports", "risk", 1.3),
    ("luxury-travel", "planning", 1.3),
    ("family-friendly", "risk", 0.6),
    ("unknown-type", "risk", 1.0),
]


def run_validation():
    """Run reference checks on the trait matrices."""

    logger.info("=" * 60)
    logger.info("SMOKE TEST: Trait Compatibility Matrices")
    logger.info("=" * 60)

    from traitmatch.evaluation import check_curve_invariants
    from traitmatch.scoring import adventure_type_weight, score_dimension

    failures = []

    # =========================================================================
    # Reference pairs
    # =========================================================================
    logger.info("\nTEST 1: Reference pairs")
    for dimension, v1, v2, expected, name in REFERENCE_CASES:
        result = score_dimension(dimension, v1, v2)
        status = "OK" if abs(result - expected) < 1e-9 else "FAILED"
        logger.info(f"  {name}: {dimension}({v1}, {v2}) = {result} (expected {expected}) {status}")
        if status != "OK":
            failures.append(name)

    # =========================================================================
    # Adventure type weights
    # =========================================================================
    logger.info("\nTEST 2: Adventure type weights")
    for adventure_type, dimension, expected in WEIGHT_CASES:
        result = adventure_type_weight(adventure_type, dimension)
        status = "OK" if abs(result - expected) < 1e-9 else "FAILED"
        logger.info(f"  {adventure_type}/{dimension} = {result} (expected {expected}) {status}")
        if status != "OK":
            failures.append(f"weight {adventure_type}/{dimension}")

    # =========================================================================
    # Behavioural patterns
    # =========================================================================
    logger.info("\nTEST 3: Behavioural patterns")
    patterns = {
        "Adventure complementarity beats identical":
            score_dimension("adventure", 45, 55) > score_dimension("adventure", 50, 50),
        "Planning complementarity beats identical":
            score_dimension("planning", 42, 58) > score_dimension("planning", 50, 50),
        "Extreme differences heavily penalised": all(
            score < 0.3 for score in [
                score_dimension("social", 10, 90),
                score_dimension("adventure", 5, 95),
                score_dimension("planning", 0, 100),
                score_dimension("risk", 10, 90),
            ]
        ),
        "Adventure type weighting shifts risk":
            score_dimension("risk", 80, 85, "extreme-sports") > score_dimension("risk", 80, 85)
            > score_dimension("risk", 80, 85, "wellness-retreat"),
        "Weighted risk stays within bounds":
            score_dimension("risk", 80, 85, "extreme-sports") == 1.0,
    }
    for name, passed in patterns.items():
        logger.info(f"  {name}: {'OK' if passed else 'FAILED'}")
        if not passed:
            failures.append(name)

    # =========================================================================
    # Curve invariants
    # =========================================================================
    logger.info("\nTEST 4: Curve invariants")
    report = check_curve_invariants()
    logger.info(f"  {report.to_dict()}")
    if not report.passed:
        failures.append("curve invariants")

    # =========================================================================
    # Summary
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("SMOKE TEST SUMMARY")
    logger.info("=" * 60)

    if not failures:
        logger.info("\n  ALL TESTS PASSED")
        return 0
    else:
        logger.error(f"\n  {len(failures)} CHECK(S) FAILED: {failures}")
        return 1


if __name__ == "__main__":
    sys.exit(run_validation())
