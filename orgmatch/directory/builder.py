"""Directory builder.

Walks the org hierarchy, assigns every person a unique canonical
identifier and records their department / team context:

- department: the top-level branch (direct report of the organization
  lead) the person descends from, remapped through the department label
  table
- team: the nearest team leader above the person, below department-head
  level; a team leader with no team leader above them heads their own team
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..logging_config import TRACE
from .collision import ClaimCounter
from .models import Directory, DirectoryEntry
from .org_chart import OrgNode
from .variants import parse_name_parts

if TYPE_CHECKING:
    from ..config import ConfigLoader

logger = logging.getLogger(__name__)

DEFAULT_ROOT_DEPARTMENT = "Executive"


@dataclass(frozen=True)
class TraversalContext:
    """Ancestor context threaded down the hierarchy.

    Attributes:
        department_head: Name of the department head above this node, None at department-head level
        team_leader: Name of the nearest team leader above this node
    """

    department_head: str | None = None
    team_leader: str | None = None


class DirectoryBuilder:
    """Builds a canonical Directory from an org hierarchy.

    Each build() call owns a fresh ClaimCounter, so one builder can be
    reused across refreshes without leaking collision state between them.
    """

    def __init__(
        self,
        domain: str | None = None,
        department_labels: Mapping[str, str] | None = None,
        root_department: str = DEFAULT_ROOT_DEPARTMENT,
    ):
        """Initialize the builder.

        Args:
            domain: Email domain for generated identifiers
            department_labels: Leader name -> department label remap table
            root_department: Department given to the organization lead
        """
        self.domain = domain
        self.department_labels = dict(department_labels or {})
        self.root_department = root_department

    @classmethod
    def from_config(cls, config: ConfigLoader) -> DirectoryBuilder:
        """Create a builder from identity.* and directory.* config keys."""
        return cls(
            domain=config.get_str("identity.domain"),
            department_labels=config.get_json("directory.department_labels"),
            root_department=config.get_str("directory.root_department"),
        )

    def department_label(self, leader_name: str) -> str:
        """Map a department head's name to its department label."""
        return self.department_labels.get(leader_name, leader_name)

    def build(self, root: OrgNode) -> Directory:
        """Build the directory for one org-structure refresh.

        Args:
            root: The organization lead; its reports are department heads

        Returns:
            The immutable Directory
        """
        counter = ClaimCounter(domain=self.domain)
        entries: list[DirectoryEntry] = []

        self._add_org_lead(root, counter, entries)
        for department_head in root.reports:
            self._traverse(department_head, TraversalContext(), counter, entries)

        directory = Directory(entries, domain=self.domain)
        self._log_summary(root, directory)
        return directory

    def _add_org_lead(self, root: OrgNode, counter: ClaimCounter, entries: list[DirectoryEntry]) -> None:
        parts = parse_name_parts(root.name)
        if parts is None:
            logger.warning(f"Could not generate identifier for organization lead: {root.name!r}")
            return

        # The lead claims their base identifier before anyone else
        assignment = counter.assign(parts)
        entries.append(
            DirectoryEntry(
                canonical_id=assignment.identifier,
                name=root.name,
                title=root.title,
                department=self.root_department,
                is_org_lead=True,
                direct_reports=root.direct_reports,
                total_subordinates=root.total_subordinates,
            )
        )

    def _traverse(
        self,
        node: OrgNode,
        context: TraversalContext,
        counter: ClaimCounter,
        entries: list[DirectoryEntry],
    ) -> None:
        is_department_head = context.department_head is None
        is_team_leader = node.has_reports and not is_department_head

        department_head = context.department_head or node.name
        department = self.department_label(department_head)
        team = context.team_leader or (node.name if is_team_leader else None)

        parts = parse_name_parts(node.name)
        if parts is None:
            logger.warning(f"Could not generate identifier for: {node.name!r} ({department}), skipping")
        else:
            assignment = counter.assign(parts)
            logger.log(
                TRACE,
                f"{node.name} -> {assignment.identifier} ({assignment.outcome.value}, "
                f"{assignment.claim_count} prior claims on {assignment.base_identifier})"
            )
            entries.append(
                DirectoryEntry(
                    canonical_id=assignment.identifier,
                    name=node.name,
                    title=node.title,
                    department=department,
                    team=team,
                    is_department_head=is_department_head,
                    is_team_leader=is_team_leader,
                    direct_reports=node.direct_reports,
                    total_subordinates=node.total_subordinates,
                )
            )

        # Reports of a skipped person keep their place in the hierarchy
        child_context = TraversalContext(
            department_head=department_head,
            team_leader=node.name if is_team_leader else context.team_leader,
        )
        for report in node.reports:
            self._traverse(report, child_context, counter, entries)

    def _log_summary(self, root: OrgNode, directory: Directory) -> None:
        headcounts = directory.headcount_by_department()
        people = sum(1 for _ in root.walk())
        logger.info(
            f"Built directory with {len(directory)} entries across {len(headcounts)} departments "
            f"({people - len(directory)} of {people} people skipped)"
        )

        if not logger.isEnabledFor(logging.DEBUG):
            return

        for head in directory.department_heads():
            logger.debug(
                f"Department head {head.department}: {head.name} "
                f"({head.direct_reports} direct reports, {head.total_subordinates} total team)"
            )
        for leader in directory.team_leaders():
            logger.debug(f"Team leader {leader.name} ({leader.title}) - {leader.department}")
        for department, count in headcounts.items():
            logger.debug(f"Headcount {department}: {count}")


def build_directory(
    root: OrgNode,
    domain: str | None = None,
    department_labels: Mapping[str, str] | None = None,
    root_department: str = DEFAULT_ROOT_DEPARTMENT,
) -> Directory:
    """Build a canonical Directory from an org hierarchy root.

    Convenience wrapper around DirectoryBuilder.
    """
    builder = DirectoryBuilder(domain=domain, department_labels=department_labels, root_department=root_department)
    return builder.build(root)
