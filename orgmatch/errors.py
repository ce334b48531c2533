"""Exceptions raised by the identity resolution engine.

Unparseable names and ambiguous matches are expected outcomes and never
raise. Only structural problems (no directory, unreadable org chart,
corrupt alias table) surface as exceptions.
"""

from __future__ import annotations


class IdentityEngineError(Exception):
    """Base exception for identity engine errors."""

    pass


class DirectoryNotBuiltError(IdentityEngineError):
    """Raised when resolution is attempted before the directory exists."""

    pass


class DirectoryIntegrityError(IdentityEngineError):
    """Raised when two directory entries share a canonical identifier."""

    pass


class OrgStructureError(IdentityEngineError):
    """Raised when the org structure cannot be read or fails validation."""

    pass


class AliasStoreError(IdentityEngineError):
    """Raised when the alias table cannot be read or written."""

    pass
