"""Alias strategy: human-curated overrides, consulted before any algorithm."""

from __future__ import annotations

from ...aliases.store import AliasStore
from ...directory.models import Directory
from ..models import AutoMatch, ExternalIdentity, MatchMethod, MatchResult, NeedsResolution
from ..policy import MatchPolicy
from .base import ResolutionStrategy


class AliasMatchStrategy(ResolutionStrategy):
    """Resolve identifiers that have a recorded alias.

    An aliased identifier is final here: it either lands on its alias
    target or is reported as a stale alias. It never reaches fuzzy matching.
    """

    def __init__(self, aliases: AliasStore, policy: MatchPolicy | None = None):
        super().__init__(policy)
        self.aliases = aliases

    @property
    def name(self) -> str:
        return "alias"

    def resolve(self, identity: ExternalIdentity, directory: Directory) -> MatchResult | None:
        if not self.aliases.has_alias(identity.identifier):
            return None

        target = self.aliases.resolve_alias(identity.identifier)
        entry = directory.get(target)
        if entry is None:
            return NeedsResolution(identity=identity, reason="stale_alias")

        return AutoMatch(identity=identity, canonical_id=entry.canonical_id, similarity=100, method=MatchMethod.ALIAS)
