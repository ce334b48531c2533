"""Coverage reporting for the alias curation loop.

For each unmatched identity the report shows its alias-resolved form and
whether that form exists in the directory, which separates "no alias
yet" from "alias present but pointing at the wrong identifier".
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .aliases.store import AliasStore
from .directory.models import Directory, normalize_identifier
from .errors import DirectoryNotBuiltError
from .matching.models import CandidateMatch, ExternalIdentity, ResolutionReport
from .matching.similarity import percent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CoverageGap:
    """An external identity that did not resolve to a directory entry"""

    external_id: str
    name: str | None
    resolved_id: str
    alias_present: bool
    resolved_in_directory: bool
    candidates: tuple[CandidateMatch, ...] = ()


@dataclass
class CoverageReport:
    total: int
    matched: int
    unmatched: int
    percentage: int
    gaps: list[CoverageGap] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return self.unmatched == 0


def build_coverage_report(
    identities: Iterable[ExternalIdentity | dict],
    directory: Directory | None,
    aliases: AliasStore | None = None,
    resolution: ResolutionReport | None = None,
) -> CoverageReport:
    """Measure how many external identities land on a directory entry.

    Args:
        identities: External identities or raw export records
        directory: The canonical directory
        aliases: Alias store applied before lookup
        resolution: Optional resolver output; its auto-matches count as
            matched and its candidates are attached to gaps

    Raises:
        DirectoryNotBuiltError: If directory is None
    """
    if directory is None:
        raise DirectoryNotBuiltError("Coverage requested before the directory was built")

    auto_matched: set[str] = set()
    candidates: dict[str, tuple[CandidateMatch, ...]] = {}
    if resolution is not None:
        auto_matched = {normalize_identifier(m.external_id) for m in resolution.auto_matched}
        candidates = {normalize_identifier(n.external_id): n.candidates for n in resolution.needs_resolution}

    total = 0
    matched = 0
    gaps: list[CoverageGap] = []
    for item in identities:
        identity = item if isinstance(item, ExternalIdentity) else ExternalIdentity.from_record(item)
        total += 1
        key = normalize_identifier(identity.identifier)
        resolved = aliases.resolve_alias(key) if aliases is not None else key
        in_directory = resolved in directory

        if in_directory or key in auto_matched:
            matched += 1
            continue

        gaps.append(
            CoverageGap(
                external_id=key,
                name=identity.name,
                resolved_id=resolved,
                alias_present=aliases is not None and aliases.has_alias(key),
                resolved_in_directory=in_directory,
                candidates=candidates.get(key, ()),
            )
        )

    return CoverageReport(
        total=total,
        matched=matched,
        unmatched=len(gaps),
        percentage=percent(matched, total) if total else 100,
        gaps=gaps,
    )


def format_coverage_report(report: CoverageReport) -> str:
    """Render a console-oriented summary with one block per gap."""
    lines = [
        "=== Identity Coverage ===",
        f"Total identities: {report.total}",
        f"Matched:          {report.matched}",
        f"Unmatched:        {report.unmatched}",
        f"Coverage:         {report.percentage}%",
    ]
    if report.gaps:
        lines.append("")
        lines.append("Unmatched identities:")
        for gap in report.gaps:
            label = f"{gap.external_id} ({gap.name})" if gap.name else gap.external_id
            lines.append(f"  - {label}")
            if gap.alias_present:
                lines.append(f"      alias -> {gap.resolved_id} (not in directory)")
            else:
                lines.append("      no alias")
            for candidate in gap.candidates:
                lines.append(
                    f"      candidate: {candidate.canonical_id} {candidate.name} "
                    f"[{candidate.department}] {candidate.similarity}%"
                )
    return "\n".join(lines)


def log_coverage_report(report: CoverageReport, log: logging.Logger | None = None) -> None:
    """Emit the coverage summary at INFO and each gap at WARNING."""
    log = log or logger
    log.info(f"Identity coverage: {report.matched}/{report.total} matched ({report.percentage}%)")
    for gap in report.gaps:
        state = f"alias -> {gap.resolved_id} (not in directory)" if gap.alias_present else "no alias"
        log.warning(f"Unmatched identity {gap.external_id} ({gap.name or 'no name'}): {state}")
