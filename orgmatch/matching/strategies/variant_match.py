"""Variant strategy: regenerate identifiers from the display name."""

from __future__ import annotations

from ...directory.models import Directory
from ...directory.variants import generate_variants
from ..models import AutoMatch, ExternalIdentity, MatchMethod, MatchResult
from .base import ResolutionStrategy


class VariantMatchStrategy(ResolutionStrategy):
    """Match when any identifier the naming convention would generate for
    the display name exists in the directory.

    Variants are tried in priority order, so "Luis Amadeo" lands on
    lamadeo@ before luis.amadeo@ when both exist.
    """

    @property
    def name(self) -> str:
        return "variant"

    def resolve(self, identity: ExternalIdentity, directory: Directory) -> MatchResult | None:
        if not identity.name:
            return None

        for variant in generate_variants(identity.name, directory.domain):
            entry = directory.get(variant)
            if entry is not None:
                return AutoMatch(
                    identity=identity,
                    canonical_id=entry.canonical_id,
                    similarity=self.policy.variant_similarity,
                    method=MatchMethod.VARIANT,
                )
        return None
