"""Candidate identifier generation from a person's full name.

Enumerates the identifiers the organization's email naming convention
could have produced for a name, in priority order:

    1. {first-initial}{last}           primary convention
    2. {first}.{last}                  secondary form used on collision
    3. {first-initial}{middle-initial}{last}   only with a middle name
    4. {first}
    5. {last}
"""

from __future__ import annotations

import re
import unicodedata
from typing import NamedTuple

_NON_LETTERS = re.compile(r"[^a-z]")


def clean_token(token: str) -> str:
    """Lower-case a name token and drop everything outside a-z.

    Accents are folded first so "José" becomes "jose" rather than "jos".

    Examples:
        "O'Brien" -> "obrien"
        "J." -> "j"
        "Smith-Clary" -> "smithclary"
    """
    folded = unicodedata.normalize("NFKD", token).encode("ascii", "ignore").decode("ascii")
    return _NON_LETTERS.sub("", folded.lower())


def with_domain(local_part: str, domain: str | None) -> str:
    """Attach the organization domain to a local part, if there is one."""
    return f"{local_part}@{domain}" if domain else local_part


def insert_suffix(identifier: str, suffix: int) -> str:
    """Insert a numeric suffix before the domain separator.

    Examples:
        ("jsmith@x.com", 3) -> "jsmith3@x.com"
        ("jsmith", 3) -> "jsmith3"
    """
    local_part, sep, domain = identifier.partition("@")
    return f"{local_part}{suffix}{sep}{domain}"


class NameParts(NamedTuple):
    """Cleaned name tokens used to build candidate identifiers."""

    first: str
    middle: str | None
    last: str

    @property
    def has_middle(self) -> bool:
        return bool(self.middle)

    def primary(self, domain: str | None = None) -> str:
        return with_domain(f"{self.first[0]}{self.last}", domain)

    def dotted(self, domain: str | None = None) -> str:
        return with_domain(f"{self.first}.{self.last}", domain)

    def middle_initial(self, domain: str | None = None) -> str | None:
        if not self.middle:
            return None
        return with_domain(f"{self.first[0]}{self.middle[0]}{self.last}", domain)


def parse_name_parts(full_name: str) -> NameParts | None:
    """Split a full name into first / middle / last tokens.

    The first token is the given name and the last token the surname. Only
    a name of exactly three tokens has a middle name; longer names such as
    "Ana Maria de Souza" keep first and last only. Tokens that clean down
    to nothing are dropped before counting.

    Returns:
        NameParts, or None when fewer than two usable tokens remain
    """
    if not full_name:
        return None
    tokens = [t for t in (clean_token(raw) for raw in full_name.split()) if t]
    if len(tokens) < 2:
        return None
    middle = tokens[1] if len(tokens) == 3 else None
    return NameParts(first=tokens[0], middle=middle, last=tokens[-1])


def generate_variants(full_name: str, domain: str | None = None) -> list[str]:
    """Generate all candidate identifiers for a name, highest priority first.

    Single-token names cannot be disambiguated by the naming convention
    and produce no variants; callers route them to manual resolution.

    Args:
        full_name: Display name, e.g. "Luis Amadeo"
        domain: Organization email domain, e.g. "techco.com"

    Returns:
        Ordered identifiers without repeats, e.g.
        ["lamadeo@techco.com", "luis.amadeo@techco.com", "luis@techco.com", "amadeo@techco.com"]
    """
    parts = parse_name_parts(full_name)
    if parts is None:
        return []

    ordered = [
        parts.primary(domain),
        parts.dotted(domain),
        parts.middle_initial(domain),
        with_domain(parts.first, domain),
        with_domain(parts.last, domain),
    ]
    # "Jo O" yields "jo" twice (primary and bare first); keep the first occurrence
    return list(dict.fromkeys(v for v in ordered if v))
