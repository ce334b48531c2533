"""Department and team attribution for usage aggregation.

Every identifier maps either to its canonical entry's department and
team or to the Unknown sentinel. Aggregation code treats Unknown as its
own bucket.
"""

from __future__ import annotations

from dataclasses import dataclass

from .aliases.store import AliasStore
from .directory.models import Directory, DirectoryEntry, normalize_identifier
from .errors import DirectoryNotBuiltError
from .matching.models import ResolutionReport

UNKNOWN_DEPARTMENT = "Unknown"


@dataclass(frozen=True)
class Attribution:
    """Where an identifier's usage is counted"""

    identifier: str
    department: str
    team: str | None = None
    canonical_id: str | None = None
    name: str | None = None
    title: str | None = None
    is_department_head: bool = False
    is_team_leader: bool = False
    is_current_employee: bool = False

    @property
    def is_unknown(self) -> bool:
        return not self.is_current_employee

    @classmethod
    def from_entry(cls, identifier: str, entry: DirectoryEntry) -> Attribution:
        return cls(
            identifier=identifier,
            department=entry.department,
            team=entry.team,
            canonical_id=entry.canonical_id,
            name=entry.name,
            title=entry.title,
            is_department_head=entry.is_department_head,
            is_team_leader=entry.is_team_leader,
            is_current_employee=True,
        )


def unknown_attribution(identifier: str) -> Attribution:
    """The sentinel for identifiers with no directory entry."""
    return Attribution(identifier=normalize_identifier(identifier), department=UNKNOWN_DEPARTMENT)


def attribute(identifier: str, directory: Directory | None, aliases: AliasStore | None = None) -> Attribution:
    """Alias-resolve an identifier and look up its department and team.

    Raises:
        DirectoryNotBuiltError: If directory is None
    """
    if directory is None:
        raise DirectoryNotBuiltError("Attribution attempted before the directory was built")

    key = normalize_identifier(identifier)
    resolved = aliases.resolve_alias(key) if aliases is not None else key
    entry = directory.get(resolved)
    if entry is None:
        return unknown_attribution(key)
    return Attribution.from_entry(key, entry)


def is_current_employee(identifier: str, directory: Directory | None, aliases: AliasStore | None = None) -> bool:
    return attribute(identifier, directory, aliases).is_current_employee


def attributions_for(report: ResolutionReport, directory: Directory | None) -> dict[str, Attribution]:
    """Attribution for every external identifier in a resolution report.

    Auto-matched identifiers take their matched entry's department. The
    rest are Unknown.
    """
    if directory is None:
        raise DirectoryNotBuiltError("Attribution attempted before the directory was built")

    result: dict[str, Attribution] = {}
    for match in report.auto_matched:
        key = normalize_identifier(match.external_id)
        entry = directory.get(match.canonical_id)
        result[key] = Attribution.from_entry(key, entry) if entry is not None else unknown_attribution(key)
    for item in report.needs_resolution:
        key = normalize_identifier(item.external_id)
        result[key] = unknown_attribution(key)
    return result
