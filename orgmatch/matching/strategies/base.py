"""Interfaces for the identity resolution strategies.

Strategies run in a fixed order (alias, exact, variant, fuzzy). Each one
either returns a final MatchResult or None to hand the identity to the
next strategy.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ...directory.models import Directory
from ..models import ExternalIdentity, MatchResult
from ..policy import MatchPolicy


class ResolutionStrategy(ABC):
    """Base class for identity resolution strategies"""

    def __init__(self, policy: MatchPolicy | None = None):
        self.policy = policy or MatchPolicy()

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy name for logging and debugging"""
        pass

    @abstractmethod
    def resolve(self, identity: ExternalIdentity, directory: Directory) -> MatchResult | None:
        """Attempt to resolve an external identity.

        Args:
            identity: The identity from a vendor export
            directory: The canonical directory

        Returns:
            A final MatchResult, or None when this strategy does not apply
        """
        pass
