"""Canonical directory construction: candidate generation, collision policy and hierarchy traversal."""

from __future__ import annotations

from .builder import DirectoryBuilder, TraversalContext, build_directory
from .collision import Assignment, ClaimCounter, CollisionOutcome, choose_outcome
from .models import Directory, DirectoryEntry, normalize_identifier
from .org_chart import OrgNode, load_org_chart, parse_org_chart
from .variants import NameParts, generate_variants, parse_name_parts

__all__ = [
    "Assignment",
    "ClaimCounter",
    "CollisionOutcome",
    "Directory",
    "DirectoryBuilder",
    "DirectoryEntry",
    "NameParts",
    "OrgNode",
    "TraversalContext",
    "build_directory",
    "choose_outcome",
    "generate_variants",
    "load_org_chart",
    "normalize_identifier",
    "parse_name_parts",
    "parse_org_chart",
]
