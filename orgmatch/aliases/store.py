"""Alias store: human-curated overrides from external identifiers to
canonical identifiers.

The table is read once at process start and is read-only for the rest of
a resolution run. Curation (record, merge_matches, accept_*) happens
between runs and only ever appends or corrects entries.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING

from ..directory.models import Directory, normalize_identifier
from ..errors import DirectoryNotBuiltError

if TYPE_CHECKING:
    from ..matching.models import AutoMatch, NeedsResolution

logger = logging.getLogger(__name__)


class AliasStore:
    """Normalized key -> key override table"""

    def __init__(self, aliases: Mapping[str, str] | None = None):
        self._aliases: dict[str, str] = {}
        for external, canonical in (aliases or {}).items():
            key = normalize_identifier(external)
            value = normalize_identifier(canonical)
            if key and value and key != value:
                self._aliases[key] = value

    def __len__(self) -> int:
        return len(self._aliases)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and self.has_alias(identifier)

    def __iter__(self) -> Iterator[str]:
        return iter(self._aliases)

    def __repr__(self) -> str:
        return f"AliasStore(entries={len(self._aliases)})"

    def has_alias(self, identifier: str) -> bool:
        return normalize_identifier(identifier) in self._aliases

    def resolve_alias(self, identifier: str) -> str:
        """Return the canonical identifier recorded for an external one.

        Identifiers without an override come back unchanged apart from
        case and whitespace normalization.
        """
        key = normalize_identifier(identifier)
        return self._aliases.get(key, key)

    def is_known(self, identifier: str, directory: Directory | None) -> bool:
        """Whether the alias-resolved identifier exists in the directory.

        Raises:
            DirectoryNotBuiltError: If no directory is supplied
        """
        if directory is None:
            raise DirectoryNotBuiltError("Cannot check alias targets before the directory is built")
        return self.resolve_alias(identifier) in directory

    def entries(self) -> dict[str, str]:
        """Copy of the table, sorted by external identifier."""
        return dict(sorted(self._aliases.items()))

    def record(self, external_id: str, canonical_id: str) -> bool:
        """Add or correct an override.

        Identity mappings are ignored since lookups already fall back to
        the identifier itself.

        Returns:
            True if the table changed
        """
        key = normalize_identifier(external_id)
        value = normalize_identifier(canonical_id)
        if not key or not value:
            raise ValueError("Alias identifiers must be non-empty")
        if key == value or self._aliases.get(key) == value:
            return False

        previous = self._aliases.get(key)
        self._aliases[key] = value
        if previous is None:
            logger.info(f"Recorded alias {key} -> {value}")
        else:
            logger.info(f"Corrected alias {key}: {previous} -> {value}")
        return True

    def merge_matches(self, auto_matched: Iterable[AutoMatch]) -> int:
        """Record every auto-match whose external identifier differs from its canonical one.

        Args:
            auto_matched: AutoMatch results from a resolution run

        Returns:
            Number of aliases added or corrected
        """
        changed = 0
        for match in auto_matched:
            if normalize_identifier(match.external_id) == normalize_identifier(match.canonical_id):
                continue
            if self.record(match.external_id, match.canonical_id):
                changed += 1
        if changed:
            logger.info(f"Merged {changed} auto-matches into the alias table")
        return changed


def accept_candidate(store: AliasStore, item: NeedsResolution, index: int = 0) -> str:
    """Turn a reviewer's pick from a needs-resolution item into an alias.

    Args:
        store: Alias store to update
        item: The NeedsResolution result under review
        index: Position of the chosen candidate (0 = best)

    Returns:
        The canonical identifier that was recorded
    """
    if not item.candidates:
        raise ValueError(f"{item.external_id} has no candidates to accept")
    if not 0 <= index < len(item.candidates):
        raise IndexError(f"Candidate index {index} out of range for {item.external_id}")
    canonical_id = item.candidates[index].canonical_id
    store.record(item.external_id, canonical_id)
    return canonical_id


def accept_manual(
    store: AliasStore,
    external_id: str,
    canonical_id: str,
    directory: Directory | None = None,
) -> str:
    """Record a canonical identifier typed in by a reviewer.

    When a directory is given the target must exist in it.
    """
    target = normalize_identifier(canonical_id)
    if directory is not None and target not in directory:
        raise ValueError(f"{target} is not in the directory")
    store.record(external_id, target)
    return target
