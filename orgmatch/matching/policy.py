"""Tunable thresholds for identity resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import ConfigLoader

DEFAULT_AUTO_ACCEPT_THRESHOLD = 80
DEFAULT_AMBIGUITY_MARGIN = 10
DEFAULT_CANDIDATE_FLOOR = 50
DEFAULT_MAX_CANDIDATES = 5
DEFAULT_VARIANT_SIMILARITY = 95


@dataclass(frozen=True)
class MatchPolicy:
    """Thresholds applied by the resolver.

    Attributes:
        threshold: Minimum fuzzy score for auto-matching
        margin: Points the top fuzzy candidate must lead the runner-up by
        candidate_floor: Minimum score for a directory entry to count as a candidate
        max_candidates: Candidates attached to a needs-resolution result
        variant_similarity: Score reported for generated-variant matches
    """

    threshold: int = DEFAULT_AUTO_ACCEPT_THRESHOLD
    margin: int = DEFAULT_AMBIGUITY_MARGIN
    candidate_floor: int = DEFAULT_CANDIDATE_FLOOR
    max_candidates: int = DEFAULT_MAX_CANDIDATES
    variant_similarity: int = DEFAULT_VARIANT_SIMILARITY

    def __post_init__(self) -> None:
        for name in ("threshold", "margin", "candidate_floor", "variant_similarity"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be between 0 and 100, got {value}")
        if self.max_candidates < 1:
            raise ValueError(f"max_candidates must be at least 1, got {self.max_candidates}")

    @classmethod
    def from_config(cls, config: ConfigLoader) -> MatchPolicy:
        """Create a policy from matching.* config keys."""
        return cls(
            threshold=config.get_int("matching.auto_accept_threshold"),
            margin=config.get_int("matching.ambiguity_margin"),
            candidate_floor=config.get_int("matching.candidate_floor"),
            max_candidates=config.get_int("matching.max_candidates"),
            variant_similarity=config.get_int("matching.variant_similarity"),
        )
