"""Org hierarchy input.

The org-structure export is a rooted tree. The root is the organization
lead; its direct reports are department heads. Nodes look like:

    {"name": "Luis Amadeo", "title": "VP Agentic AI",
     "directReports": 3, "totalTeamSize": 12, "reports": [...]}

The tree is trusted input from a validated export; cycles are not defended against.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..errors import OrgStructureError

logger = logging.getLogger(__name__)


class OrgNode(BaseModel):
    """One person in the org hierarchy (transient, used only while building the directory)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    title: str = ""
    direct_reports: int = Field(default=0, ge=0, alias="directReports")
    total_subordinates: int = Field(default=0, ge=0, alias="totalTeamSize")
    reports: list[OrgNode] = Field(default_factory=list)

    @property
    def has_reports(self) -> bool:
        """Whether anyone reports to this person."""
        return self.direct_reports > 0 or bool(self.reports)

    def walk(self) -> Iterator[OrgNode]:
        """Yield this node and every descendant, depth first."""
        yield self
        for report in self.reports:
            yield from report.walk()


def parse_org_chart(data: Any) -> OrgNode:
    """Validate an org-structure payload and return its root node.

    Accepts the full export ({"organization": {"ceo": {...}}}) or a bare root node.

    Raises:
        OrgStructureError: If the payload does not describe a valid tree
    """
    if isinstance(data, dict) and "organization" in data:
        organization = data["organization"]
        if not isinstance(organization, dict) or "ceo" not in organization:
            raise OrgStructureError("Org chart 'organization' block has no 'ceo' root")
        data = organization["ceo"]

    try:
        return OrgNode.model_validate(data)
    except PydanticValidationError as e:
        raise OrgStructureError(f"Invalid org chart: {e.error_count()} validation error(s)\n{e}") from e


def load_org_chart(path: str | Path) -> OrgNode:
    """Read and validate an org-structure JSON file.

    Raises:
        OrgStructureError: If the file is missing, unreadable or invalid
    """
    chart_path = Path(path)
    try:
        data = json.loads(chart_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise OrgStructureError(f"Org chart not found at {chart_path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise OrgStructureError(f"Could not read org chart {chart_path}: {e}") from e

    root = parse_org_chart(data)
    logger.debug(f"Loaded org chart rooted at {root.name} from {chart_path}")
    return root
