"""Identity matching: similarity scoring, resolution strategies and the resolver."""

from __future__ import annotations

from .models import (
    AutoMatch,
    CandidateMatch,
    ExternalIdentity,
    MatchMethod,
    MatchResult,
    NeedsResolution,
    ResolutionReport,
    ResolutionStats,
)
from .policy import MatchPolicy
from .resolver import IdentityResolver, resolve
from .similarity import similarity

__all__ = [
    "AutoMatch",
    "CandidateMatch",
    "ExternalIdentity",
    "IdentityResolver",
    "MatchMethod",
    "MatchPolicy",
    "MatchResult",
    "NeedsResolution",
    "ResolutionReport",
    "ResolutionStats",
    "resolve",
    "similarity",
]
