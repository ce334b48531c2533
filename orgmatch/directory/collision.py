"""Collision resolution for canonical identifiers.

When two or more people would generate the same primary identifier, the
policy below picks a distinct identifier for each, keyed on how many
people have already claimed that primary ("base") identifier:

    claims | middle name | outcome
    -------+-------------+---------------------------------------
       0   |     any     | UNIQUE           base identifier
       1   |     any     | SECOND_FORM      first.last
       2   |     yes     | MIDDLE_INITIAL   first-initial + middle-initial + last
      2+   |     no      | NUMERIC_SUFFIX   base with (claims + 1) before the "@"
      3+   |     yes     | NUMERIC_SUFFIX

The claim count tracks the base identifier, not the identifier finally
assigned, so it always reads "how many people share this root pattern".
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum

from .variants import NameParts, insert_suffix

logger = logging.getLogger(__name__)


class CollisionOutcome(Enum):
    """Which tiebreak produced a canonical identifier"""

    UNIQUE = "unique"
    SECOND_FORM = "second_form"
    MIDDLE_INITIAL_FORM = "middle_initial_form"
    NUMERIC_SUFFIX = "numeric_suffix"


def choose_outcome(claim_count: int, has_middle: bool) -> CollisionOutcome:
    """Pick the tiebreak for a person given prior claims on their base identifier.

    Args:
        claim_count: People who already claimed the same base identifier
        has_middle: Whether this person has a middle name token

    Returns:
        The collision outcome to apply
    """
    if claim_count == 0:
        return CollisionOutcome.UNIQUE
    if claim_count == 1:
        return CollisionOutcome.SECOND_FORM
    if claim_count == 2 and has_middle:
        return CollisionOutcome.MIDDLE_INITIAL_FORM
    return CollisionOutcome.NUMERIC_SUFFIX


def identifier_for(parts: NameParts, outcome: CollisionOutcome, claim_count: int, domain: str | None) -> str:
    """Render the identifier a collision outcome stands for."""
    if outcome is CollisionOutcome.UNIQUE:
        return parts.primary(domain)
    if outcome is CollisionOutcome.SECOND_FORM:
        return parts.dotted(domain)
    if outcome is CollisionOutcome.MIDDLE_INITIAL_FORM:
        middle_form = parts.middle_initial(domain)
        if middle_form is None:
            raise ValueError(f"{parts} has no middle name for {outcome.value}")
        return middle_form
    return insert_suffix(parts.primary(domain), claim_count + 1)


@dataclass(frozen=True)
class Assignment:
    """A canonical identifier handed to one person"""

    identifier: str
    base_identifier: str
    outcome: CollisionOutcome
    claim_count: int
    escalated: bool = False


class ClaimCounter:
    """Claim state for a single directory build.

    Owned by one build call and discarded with it, so repeated or
    concurrent builds never share counts.
    """

    def __init__(self, domain: str | None = None):
        self.domain = domain
        self._claims: Counter[str] = Counter()
        self._assigned: set[str] = set()

    def claims(self, base_identifier: str) -> int:
        return self._claims[base_identifier]

    def is_assigned(self, identifier: str) -> bool:
        return identifier in self._assigned

    def assign(self, parts: NameParts) -> Assignment:
        """Assign a unique canonical identifier and record the claim.

        The decision table decides first. If its identifier was already
        handed to someone with a different base pattern (e.g. "John A Smith"
        took "jasmith" before "Jane Asmith" arrived), the suffix counter is
        walked upward until a free identifier is found.
        """
        base = parts.primary(self.domain)
        count = self._claims[base]
        outcome = choose_outcome(count, parts.has_middle)
        identifier = identifier_for(parts, outcome, count, self.domain)
        escalated = False

        if identifier in self._assigned:
            escalated = True
            outcome = CollisionOutcome.NUMERIC_SUFFIX
            suffix = count + 1
            identifier = insert_suffix(base, suffix)
            while identifier in self._assigned:
                suffix += 1
                identifier = insert_suffix(base, suffix)

        if escalated:
            logger.warning(f"Identifier collision across name patterns for base '{base}', assigned '{identifier}'")

        self._claims[base] += 1
        self._assigned.add(identifier)
        return Assignment(
            identifier=identifier,
            base_identifier=base,
            outcome=outcome,
            claim_count=count,
            escalated=escalated,
        )
