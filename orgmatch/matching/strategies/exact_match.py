"""Exact strategy: the external identifier already is a canonical identifier."""

from __future__ import annotations

from ...directory.models import Directory
from ..models import AutoMatch, ExternalIdentity, MatchMethod, MatchResult
from .base import ResolutionStrategy


class ExactMatchStrategy(ResolutionStrategy):
    """Match when the normalized identifier exists verbatim in the directory"""

    @property
    def name(self) -> str:
        return "exact"

    def resolve(self, identity: ExternalIdentity, directory: Directory) -> MatchResult | None:
        entry = directory.get(identity.identifier)
        if entry is None:
            return None
        return AutoMatch(identity=identity, canonical_id=entry.canonical_id, similarity=100, method=MatchMethod.EXACT)
