#!/usr/bin/env python3
"""
Check how much of a vendor usage export resolves to the org directory.

Builds the canonical directory from the org chart, resolves every
identity in the export (aliases first), then prints the resolution
summary and the coverage gaps to drive alias curation.

Usage:
    python scripts/check_identity_coverage.py --export data/usage_export.json
    python scripts/check_identity_coverage.py --export export.json --strict
    python scripts/check_identity_coverage.py --export export.json --write-aliases
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from orgmatch.aliases import AliasFile, load_alias_store, save_alias_store
from orgmatch.config import ConfigError, ConfigLoader
from orgmatch.coverage import build_coverage_report, format_coverage_report
from orgmatch.directory import DirectoryBuilder, load_org_chart
from orgmatch.errors import IdentityEngineError
from orgmatch.logging_config import configure_logging, resolve_level
from orgmatch.matching import ExternalIdentity, IdentityResolver, MatchPolicy
from orgmatch.settings import get_settings

logger = logging.getLogger(__name__)


def load_export(path: str | Path) -> list[ExternalIdentity]:
    """Read a vendor export: a list of records or {"users": [...]}."""
    data: Any = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("users", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of user records")
    return [ExternalIdentity.from_record(record) for record in data]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Report identity coverage of a vendor export against the org directory")
    parser.add_argument("--export", required=True, help="Vendor usage export (JSON)")
    parser.add_argument("--org-chart", help="Org chart JSON (defaults to ORGMATCH_ORG_CHART_PATH)")
    parser.add_argument("--aliases", help="Alias file (defaults to the configured alias backend)")
    parser.add_argument("--config", help="Config file (defaults to ORGMATCH_CONFIG_PATH)")
    parser.add_argument("--threshold", type=int, help="Override matching.auto_accept_threshold")
    parser.add_argument("--strict", action="store_true", help="Exit 1 unless coverage is 100%%")
    parser.add_argument(
        "--write-aliases",
        action="store_true",
        help="Record auto-matches whose identifier differs from the canonical one in the alias table",
    )
    return parser


def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    config = ConfigLoader.initialize(config_path=args.config)

    root = load_org_chart(args.org_chart or settings.org_chart_path)
    directory = DirectoryBuilder.from_config(config).build(root)

    aliases = AliasFile(args.aliases).load() if args.aliases else load_alias_store(settings)

    policy = MatchPolicy.from_config(config)
    if args.threshold is not None:
        policy = replace(policy, threshold=args.threshold)

    identities = load_export(args.export)
    resolution = IdentityResolver(policy, aliases).resolve(identities, directory)
    stats = resolution.stats

    print("=" * 60)
    print("RESOLUTION")
    print("=" * 60)
    print(f"  Total:            {stats.total}")
    print(f"  Auto-matched:     {stats.auto_matched}")
    for method, count in sorted(stats.by_method.items()):
        print(f"    {method:14} {count:>5}")
    print(f"  Needs resolution: {stats.needs_resolution}")
    print()

    report = build_coverage_report(identities, directory, aliases, resolution)
    print(format_coverage_report(report))

    if args.write_aliases:
        changed = aliases.merge_matches(resolution.auto_matched)
        if changed:
            if args.aliases:
                AliasFile(args.aliases).save(aliases)
            else:
                save_alias_store(aliases, settings)
        print()
        print(f"Aliases written:    {changed}")

    if args.strict and not report.is_complete:
        return 1
    return 0


def main() -> int:
    load_dotenv()
    args = build_parser().parse_args()
    configure_logging(source="coverage", level=resolve_level(get_settings().log_level))

    try:
        return run(args)
    except (IdentityEngineError, ConfigError, ValueError, OSError) as e:
        logger.error(f"Coverage check failed: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
