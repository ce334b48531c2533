"""Resolution result models.

An external identity (identifier + display name from a vendor export) is
classified as either auto-matched to a canonical directory entry or as
needing human resolution, with ranked candidates attached.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .similarity import percent


class MatchMethod(Enum):
    """How an auto-match was produced"""

    ALIAS = "alias"
    EXACT = "exact"
    VARIANT = "variant"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class ExternalIdentity:
    """An identifier as it appears in a vendor usage export.

    Extra attributes (seat tier, status, ...) ride along untouched.
    """

    identifier: str
    name: str | None = None
    seat_tier: str | None = None
    status: str | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> ExternalIdentity:
        """Build from an export record ({"email", "name", "seatTier", "status", ...})."""
        known = {"email", "identifier", "name", "seatTier", "seat_tier", "status"}
        identifier = record.get("email") or record.get("identifier")
        if not identifier:
            raise ValueError(f"Export record has no email/identifier: {record!r}")
        return cls(
            identifier=str(identifier),
            name=record.get("name"),
            seat_tier=record.get("seatTier", record.get("seat_tier")),
            status=record.get("status"),
            extra={k: v for k, v in record.items() if k not in known},
        )


@dataclass(frozen=True)
class CandidateMatch:
    """A directory entry offered as a possible match"""

    canonical_id: str
    name: str
    department: str
    similarity: int


@dataclass(frozen=True)
class AutoMatch:
    """An identity resolved without human review"""

    identity: ExternalIdentity
    canonical_id: str
    similarity: int
    method: MatchMethod

    @property
    def external_id(self) -> str:
        return self.identity.identifier


@dataclass(frozen=True)
class NeedsResolution:
    """An identity the engine could not confidently resolve"""

    identity: ExternalIdentity
    candidates: tuple[CandidateMatch, ...] = ()
    reason: str = "no_candidates"

    @property
    def external_id(self) -> str:
        return self.identity.identifier

    @property
    def name(self) -> str | None:
        return self.identity.name


MatchResult = AutoMatch | NeedsResolution


@dataclass(frozen=True)
class ResolutionStats:
    """Totals for one resolution run"""

    total: int
    auto_matched: int
    needs_resolution: int
    coverage: int
    by_method: dict[str, int] = field(default_factory=dict)


@dataclass
class ResolutionReport:
    """Output of one resolution run"""

    auto_matched: list[AutoMatch] = field(default_factory=list)
    needs_resolution: list[NeedsResolution] = field(default_factory=list)

    @property
    def stats(self) -> ResolutionStats:
        matched = len(self.auto_matched)
        total = matched + len(self.needs_resolution)
        by_method = Counter(match.method.value for match in self.auto_matched)
        return ResolutionStats(
            total=total,
            auto_matched=matched,
            needs_resolution=len(self.needs_resolution),
            coverage=percent(matched, total) if total else 100,
            by_method=dict(by_method),
        )

    def results(self) -> list[MatchResult]:
        """All results, auto-matched first."""
        return [*self.auto_matched, *self.needs_resolution]

    def find(self, identifier: str) -> MatchResult | None:
        """Look up the result for an external identifier (case-insensitive)."""
        key = identifier.strip().lower()
        for result in self.results():
            if result.external_id.strip().lower() == key:
                return result
        return None
