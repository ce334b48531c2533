"""Resolution strategies, in the order the resolver applies them."""

from __future__ import annotations

from .alias_match import AliasMatchStrategy
from .base import ResolutionStrategy
from .exact_match import ExactMatchStrategy
from .fuzzy_match import FuzzyMatchStrategy
from .variant_match import VariantMatchStrategy

__all__ = [
    "AliasMatchStrategy",
    "ExactMatchStrategy",
    "FuzzyMatchStrategy",
    "ResolutionStrategy",
    "VariantMatchStrategy",
]
