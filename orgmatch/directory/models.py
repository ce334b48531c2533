"""Canonical directory models.

The Directory is built once per org-structure refresh and is read-only
for the rest of the run. Nothing mutates it after construction, so any
number of resolution calls may read it at the same time.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType

from ..errors import DirectoryIntegrityError


def normalize_identifier(identifier: str) -> str:
    """Case- and whitespace-normalize an identifier for lookup."""
    return identifier.strip().lower()


@dataclass(frozen=True)
class DirectoryEntry:
    """A person's canonical identity"""

    canonical_id: str
    name: str
    title: str
    department: str
    team: str | None = None
    is_department_head: bool = False
    is_team_leader: bool = False
    is_org_lead: bool = False
    direct_reports: int = 0
    total_subordinates: int = 0


class Directory:
    """Immutable canonical directory keyed by canonical identifier.

    Raises DirectoryIntegrityError on construction if two entries share an
    identifier, so the uniqueness invariant holds however the directory
    was assembled.
    """

    def __init__(self, entries: Iterable[DirectoryEntry], domain: str | None = None):
        by_id: dict[str, DirectoryEntry] = {}
        for entry in entries:
            key = normalize_identifier(entry.canonical_id)
            if key in by_id:
                raise DirectoryIntegrityError(
                    f"Canonical identifier '{key}' assigned to both {by_id[key].name} and {entry.name}"
                )
            by_id[key] = entry

        self._by_id = MappingProxyType(by_id)
        self._entries = tuple(by_id.values())
        self.domain = domain

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DirectoryEntry]:
        return iter(self._entries)

    def __contains__(self, identifier: object) -> bool:
        if not isinstance(identifier, str):
            return False
        return normalize_identifier(identifier) in self._by_id

    def __repr__(self) -> str:
        return f"Directory(entries={len(self._entries)}, domain={self.domain!r})"

    @property
    def entries(self) -> tuple[DirectoryEntry, ...]:
        """Entries in traversal order."""
        return self._entries

    def get(self, identifier: str) -> DirectoryEntry | None:
        """Look up an entry by canonical identifier (case-insensitive)."""
        return self._by_id.get(normalize_identifier(identifier))

    def departments(self) -> list[str]:
        """Distinct department labels, in first-seen order."""
        return list(dict.fromkeys(entry.department for entry in self._entries))

    def department_heads(self) -> list[DirectoryEntry]:
        return [entry for entry in self._entries if entry.is_department_head]

    def team_leaders(self) -> list[DirectoryEntry]:
        """Team leaders below department-head level."""
        return [entry for entry in self._entries if entry.is_team_leader and not entry.is_department_head]

    def headcount_by_department(self) -> dict[str, int]:
        """Employee count per department, excluding the organization lead.

        Ordered by headcount descending, ties in first-seen order.
        """
        counts = Counter(entry.department for entry in self._entries if not entry.is_org_lead)
        return dict(counts.most_common())
