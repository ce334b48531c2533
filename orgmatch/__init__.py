"""
Identity resolution engine.

Builds a canonical directory of people from an org hierarchy and maps
identifiers from vendor usage exports onto it, so usage can be
attributed to departments and teams.
"""

from __future__ import annotations

from . import logging_config  # noqa: F401  registers the TRACE level
from .aliases import AliasStore
from .attribution import Attribution, attribute, is_current_employee
from .coverage import CoverageReport, build_coverage_report, format_coverage_report
from .directory import Directory, DirectoryBuilder, build_directory, generate_variants, load_org_chart
from .errors import DirectoryNotBuiltError, IdentityEngineError
from .matching import ExternalIdentity, IdentityResolver, MatchPolicy, resolve, similarity

__version__ = "0.1.0"

__all__ = [
    "AliasStore",
    "Attribution",
    "CoverageReport",
    "Directory",
    "DirectoryBuilder",
    "DirectoryNotBuiltError",
    "ExternalIdentity",
    "IdentityEngineError",
    "IdentityResolver",
    "MatchPolicy",
    "attribute",
    "build_coverage_report",
    "build_directory",
    "format_coverage_report",
    "generate_variants",
    "is_current_employee",
    "load_org_chart",
    "resolve",
    "similarity",
]
