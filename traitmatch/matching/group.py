"""
Group compatibility analysis.

Scores every unordered pair of travellers in a group and summarises the
result as a symmetric score matrix.

Pairs:
- Unordered: (A, B) and (B, A) are the same pair, stored with i < j
- Self-pairs are never generated
- Large groups are capped at max_pairs by reproducible sampling
"""

import logging
from dataclasses import dataclass, asdict, field
from datetime import datetime
from typing import Dict, Any, List, Optional, Sequence, Tuple

import numpy as np

from ..profiles.schema import TravelerProfile
from .personality import PersonalityMatcher

logger = logging.getLogger(__name__)


@dataclass
class GroupConfig:
    """
    Configuration for group analysis.

    Attributes:
        max_pairs: Maximum number of pairs to score (None for all)
        random_seed: Seed for pair sampling
    """
    max_pairs: Optional[int] = None
    random_seed: int = 42

    def validate(self) -> None:
        """Validate configuration values."""
        if self.max_pairs is not None and self.max_pairs < 1:
            raise ValueError(f"max_pairs must be positive, got {self.max_pairs}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "GroupConfig":
        """Create from main config dictionary."""
        group_config = config.get("group") or {}
        return cls(
            max_pairs=group_config.get("max_pairs"),
            random_seed=group_config.get("random_seed", 42)
        )


def enumerate_pairs(
    n_persons: int,
    max_pairs: Optional[int] = None,
    random_seed: Optional[int] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate unordered pairs of person indices.

    Args:
        n_persons: Number of persons
        max_pairs: Cap on returned pairs; sampled without replacement if exceeded
        random_seed: Random seed for sampling

    Returns:
        Tuple of (indices_a, indices_b) arrays with indices_a[i] < indices_b[i],
        in lexicographic order
    """
    if n_persons < 0:
        raise ValueError(f"n_persons must be non-negative, got {n_persons}")

    indices_a, indices_b = np.triu_indices(n_persons, k=1)
    max_possible = len(indices_a)

    if max_pairs is not None and max_pairs < max_possible:
        random_state = np.random.RandomState(random_seed)
        sample_idx = np.sort(random_state.choice(max_possible, size=max_pairs, replace=False))
        indices_a = indices_a[sample_idx]
        indices_b = indices_b[sample_idx]
        logger.info(f"Sampled {max_pairs} of {max_possible} pairs")

    return indices_a, indices_b


@dataclass
class GroupCompatibilityAnalysis:
    """
    Compatibility summary for a group of travellers.

    Attributes:
        user_ids: Traveller identifiers, in matrix order
        score_matrix: Symmetric (N x N) matrix of pair scores, 1.0 on the
            diagonal and NaN for pairs that were not scored
        average_score: Mean over scored pairs
        weakest_pair: (user_id, user_id, score) with the lowest score
        strongest_pair: (user_id, user_id, score) with the highest score
        conflicting_pairs: Pairs with hard conflicts and their conflict names
    """
    user_ids: List[str]
    score_matrix: np.ndarray
    average_score: float
    weakest_pair: Tuple[str, str, float]
    strongest_pair: Tuple[str, str, float]
    conflicting_pairs: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def n_pairs_scored(self) -> int:
        upper = self.score_matrix[np.triu_indices(len(self.user_ids), k=1)]
        return int(np.sum(~np.isnan(upper)))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "user_ids": list(self.user_ids),
            "average_score": float(self.average_score),
            "n_pairs_scored": self.n_pairs_scored,
            "weakest_pair": list(self.weakest_pair),
            "strongest_pair": list(self.strongest_pair),
            "conflicting_pairs": self.conflicting_pairs,
        }


def analyze_group(
    travelers: Sequence[TravelerProfile],
    matcher: PersonalityMatcher,
    config: Optional[GroupConfig] = None,
    now: Optional[datetime] = None
) -> GroupCompatibilityAnalysis:
    """
    Score all (or a sample of) traveller pairs in a group.

    Args:
        travelers: Group members
        matcher: PersonalityMatcher used for each pair
        config: GroupConfig with sampling settings
        now: Reference time passed to the matcher

    Returns:
        GroupCompatibilityAnalysis

    Raises:
        ValueError: If fewer than two travellers are given
    """
    config = config or GroupConfig()
    config.validate()

    n = len(travelers)
    if n < 2:
        raise ValueError(f"Group analysis needs at least 2 travellers, got {n}")

    indices_a, indices_b = enumerate_pairs(n, config.max_pairs, config.random_seed)
    logger.info(f"Analysing group of {n} travellers ({len(indices_a)} pairs)")

    matrix = np.full((n, n), np.nan)
    np.fill_diagonal(matrix, 1.0)
    conflicting_pairs = []

    for i, j in zip(indices_a, indices_b):
        result = matcher.match(travelers[i], travelers[j], now=now)
        matrix[i, j] = matrix[j, i] = result.score
        if result.has_conflicts:
            conflicting_pairs.append({
                "user_a": travelers[i].user_id,
                "user_b": travelers[j].user_id,
                "conflicts": list(result.conflicts),
            })

    pair_scores = matrix[indices_a, indices_b]
    weakest = int(np.argmin(pair_scores))
    strongest = int(np.argmax(pair_scores))
    user_ids = [t.user_id for t in travelers]

    analysis = GroupCompatibilityAnalysis(
        user_ids=user_ids,
        score_matrix=matrix,
        average_score=float(np.mean(pair_scores)),
        weakest_pair=(
            user_ids[indices_a[weakest]], user_ids[indices_b[weakest]], float(pair_scores[weakest])
        ),
        strongest_pair=(
            user_ids[indices_a[strongest]], user_ids[indices_b[strongest]],
            float(pair_scores[strongest])
        ),
        conflicting_pairs=conflicting_pairs
    )

    if conflicting_pairs:
        logger.warning(f"{len(conflicting_pairs)} conflicting pair(s) in group")
    logger.info(f"Group average compatibility: {analysis.average_score:.3f}")
    return analysis
