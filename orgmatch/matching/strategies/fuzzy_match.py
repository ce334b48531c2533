"""Fuzzy strategy: display-name similarity against every directory entry.

The top candidate is auto-accepted only when it clears the threshold
and leads the runner-up by the ambiguity margin. Everything else goes
to a human with up to max_candidates ranked candidates attached.
"""

from __future__ import annotations

from ...directory.models import Directory
from ..models import AutoMatch, CandidateMatch, ExternalIdentity, MatchMethod, MatchResult, NeedsResolution
from ..similarity import similarity
from .base import ResolutionStrategy


class FuzzyMatchStrategy(ResolutionStrategy):
    """Similarity-scored matching with confidence-gated auto-acceptance"""

    @property
    def name(self) -> str:
        return "fuzzy"

    def rank_candidates(self, name: str | None, directory: Directory) -> list[CandidateMatch]:
        """Score every entry and keep those at or above the candidate floor.

        Returns:
            Candidates sorted by similarity, highest first; ties keep directory order
        """
        if not name:
            return []

        candidates = []
        for entry in directory:
            score = similarity(name, entry.name)
            if score >= self.policy.candidate_floor:
                candidates.append(
                    CandidateMatch(
                        canonical_id=entry.canonical_id,
                        name=entry.name,
                        department=entry.department,
                        similarity=score,
                    )
                )
        candidates.sort(key=lambda c: c.similarity, reverse=True)
        return candidates

    def is_confident(self, candidates: list[CandidateMatch]) -> bool:
        """Whether the top candidate can be accepted without review."""
        if not candidates:
            return False
        top = candidates[0]
        if top.similarity < self.policy.threshold:
            return False
        return len(candidates) == 1 or top.similarity - candidates[1].similarity >= self.policy.margin

    def resolve(self, identity: ExternalIdentity, directory: Directory) -> MatchResult | None:
        candidates = self.rank_candidates(identity.name, directory)

        if self.is_confident(candidates):
            top = candidates[0]
            return AutoMatch(
                identity=identity,
                canonical_id=top.canonical_id,
                similarity=top.similarity,
                method=MatchMethod.FUZZY,
            )

        if not candidates:
            reason = "no_candidates" if identity.name else "no_display_name"
        elif candidates[0].similarity < self.policy.threshold:
            reason = "below_threshold"
        else:
            reason = "ambiguous"

        return NeedsResolution(
            identity=identity,
            candidates=tuple(candidates[: self.policy.max_candidates]),
            reason=reason,
        )
