"""Identity resolver.

Classifies external identities from a vendor export against the
canonical directory. Per identity the strategies run in order and the
first one that returns a result wins:

    alias -> exact -> variant -> fuzzy

Resolution is a pure classification. Recording human decisions in the
alias store is a separate curation step.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..aliases.store import AliasStore
from ..directory.models import Directory
from ..errors import DirectoryNotBuiltError
from ..logging_config import TRACE
from .models import AutoMatch, ExternalIdentity, MatchResult, NeedsResolution, ResolutionReport
from .policy import DEFAULT_AUTO_ACCEPT_THRESHOLD, MatchPolicy
from .strategies import (
    AliasMatchStrategy,
    ExactMatchStrategy,
    FuzzyMatchStrategy,
    ResolutionStrategy,
    VariantMatchStrategy,
)

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Runs the resolution strategies over a batch of external identities"""

    def __init__(self, policy: MatchPolicy | None = None, aliases: AliasStore | None = None):
        self.policy = policy or MatchPolicy()
        self.aliases = aliases
        self.strategies: list[ResolutionStrategy] = []
        if aliases is not None:
            self.strategies.append(AliasMatchStrategy(aliases, self.policy))
        self.strategies.extend(
            [
                ExactMatchStrategy(self.policy),
                VariantMatchStrategy(self.policy),
                FuzzyMatchStrategy(self.policy),
            ]
        )

    def resolve_one(self, identity: ExternalIdentity, directory: Directory) -> MatchResult:
        """Resolve a single identity. The fuzzy strategy always produces a result."""
        for strategy in self.strategies:
            result = strategy.resolve(identity, directory)
            if result is not None:
                logger.log(TRACE, f"{identity.identifier}: {strategy.name} -> {_describe(result)}")
                return result
        # Only reached by a custom strategy list without a fuzzy fallback
        return NeedsResolution(identity=identity)

    def resolve(
        self,
        external_identities: Iterable[ExternalIdentity | dict],
        directory: Directory | None,
    ) -> ResolutionReport:
        """Resolve every identity in an export.

        Args:
            external_identities: ExternalIdentity objects or raw export records
            directory: The canonical directory

        Returns:
            ResolutionReport with auto-matched and needs-resolution lists

        Raises:
            DirectoryNotBuiltError: If directory is None
        """
        if directory is None:
            raise DirectoryNotBuiltError("Resolution attempted before the directory was built")

        report = ResolutionReport()
        for item in external_identities:
            identity = item if isinstance(item, ExternalIdentity) else ExternalIdentity.from_record(item)
            result = self.resolve_one(identity, directory)
            if isinstance(result, AutoMatch):
                report.auto_matched.append(result)
            else:
                report.needs_resolution.append(result)

        stats = report.stats
        logger.info(
            f"Resolved {stats.total} identities: {stats.auto_matched} auto-matched, "
            f"{stats.needs_resolution} need resolution ({stats.coverage}% coverage)"
        )
        logger.debug(f"Auto-matches by method: {stats.by_method}")
        return report


def _describe(result: MatchResult) -> str:
    if isinstance(result, AutoMatch):
        return f"{result.canonical_id} ({result.method.value}, {result.similarity})"
    return f"needs resolution ({result.reason}, {len(result.candidates)} candidates)"


def resolve(
    external_identities: Iterable[ExternalIdentity | dict],
    directory: Directory | None,
    threshold: int = DEFAULT_AUTO_ACCEPT_THRESHOLD,
    aliases: AliasStore | None = None,
    policy: MatchPolicy | None = None,
) -> ResolutionReport:
    """Resolve external identities against a directory.

    threshold is ignored when an explicit policy is given.
    """
    if policy is None:
        policy = MatchPolicy(threshold=threshold)
    return IdentityResolver(policy, aliases).resolve(external_identities, directory)
