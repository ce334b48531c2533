"""Name similarity scoring.

similarity(a, b) returns an integer 0-100. Rules are evaluated in order
and the first one that applies wins:

    1. identical after normalization                      -> 100
    2. one name contains the other (nicknames, shortening) -> 90
    3. both have a given name and a surname:
         same surname, same given name                    -> 95
         same surname, different given name               -> max(80, edit similarity of given names)
         same given-name initial and same surname         -> 85
    4. edit similarity of the full normalized names

The score is symmetric: similarity(a, b) == similarity(b, a).
"""

from __future__ import annotations

import re
import unicodedata

from rapidfuzz.distance import Levenshtein

EXACT_SCORE = 100
FULL_NAME_MATCH_SCORE = 95
CONTAINS_SCORE = 90
INITIAL_AND_SURNAME_SCORE = 85
SURNAME_FLOOR_SCORE = 80

_NON_NAME_CHARS = re.compile(r"[^a-z\s]")


def normalize_display_name(name: str | None) -> str:
    """Normalize a display name for comparison.

    Lower-cases, folds accents, drops everything but letters and
    whitespace, collapses runs of whitespace and trims.

    Examples:
        "  J. Doe " -> "j doe"
        "Zoë O'Neil" -> "zoe oneil"
    """
    if not name:
        return ""
    folded = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    return " ".join(_NON_NAME_CHARS.sub("", folded.lower()).split())


def percent(part: int, whole: int) -> int:
    """part / whole as a whole percentage, halves rounded up."""
    return (200 * part + whole) // (2 * whole)


def edit_distance_similarity(a: str, b: str) -> int:
    """Levenshtein distance expressed as a 0-100 similarity.

    round((1 - distance / max(len_a, len_b)) * 100), and 100 when both are empty.
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return EXACT_SCORE
    distance = Levenshtein.distance(a, b)
    return percent(longest - distance, longest)


def similarity(name_a: str | None, name_b: str | None) -> int:
    """Score how alike two display names are, 0-100.

    Args:
        name_a: First display name
        name_b: Second display name

    Returns:
        Integer similarity score
    """
    a = normalize_display_name(name_a)
    b = normalize_display_name(name_b)

    if a == b:
        return EXACT_SCORE

    # An empty name is a substring of everything; it must not score 90
    if a and b and (a in b or b in a):
        return CONTAINS_SCORE

    tokens_a = a.split()
    tokens_b = b.split()

    if len(tokens_a) >= 2 and len(tokens_b) >= 2:
        given_a, surname_a = tokens_a[0], tokens_a[-1]
        given_b, surname_b = tokens_b[0], tokens_b[-1]

        if surname_a == surname_b:
            if given_a == given_b:
                return FULL_NAME_MATCH_SCORE
            return max(SURNAME_FLOOR_SCORE, edit_distance_similarity(given_a, given_b))

        # Partial-initial rule; equal surnames already returned above
        if given_a[0] == given_b[0] and surname_a == surname_b:
            return INITIAL_AND_SURNAME_SCORE

    return edit_distance_similarity(a, b)
