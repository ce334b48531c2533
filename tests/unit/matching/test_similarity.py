"""Tests for display-name similarity scoring."""

from __future__ import annotations

import pytest

from orgmatch.matching.similarity import (
    edit_distance_similarity,
    normalize_display_name,
    percent,
    similarity,
)

NAMES = [
    "Luis Amadeo",
    "J. Doe",
    "John Adam Smith",
    "Bob Smith",
    "Robert Smith",
    "Zoë O'Neil",
    "Madonna",
    "Jonathan Smith",
]


class TestNormalizeDisplayName:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("  J. Doe ", "j doe"),
            ("Zoë O'Neil", "zoe oneil"),
            ("Mary   Ann\tLee", "mary ann lee"),
            (None, ""),
            ("", ""),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_display_name(raw) == expected


class TestPercent:
    """Half-up rounding of whole percentages."""

    @pytest.mark.parametrize(
        "part,whole,expected",
        [(1, 2, 50), (1, 3, 33), (2, 3, 67), (1, 8, 13), (3, 8, 38), (0, 5, 0), (5, 5, 100)],
    )
    def test_percent(self, part, whole, expected):
        assert percent(part, whole) == expected


class TestEditDistanceSimilarity:
    def test_identical(self):
        assert edit_distance_similarity("smith", "smith") == 100

    def test_both_empty(self):
        assert edit_distance_similarity("", "") == 100

    def test_kitten_sitting(self):
        assert edit_distance_similarity("kitten", "sitting") == 57

    def test_completely_different(self):
        assert edit_distance_similarity("abc", "xyz") == 0


class TestSimilarity:
    """Test the ordered scoring rules."""

    @pytest.mark.parametrize("name", NAMES)
    def test_reflexive(self, name):
        assert similarity(name, name) == 100

    @pytest.mark.parametrize("a", NAMES)
    @pytest.mark.parametrize("b", NAMES)
    def test_symmetric(self, a, b):
        assert similarity(a, b) == similarity(b, a)

    def test_normalized_equality(self):
        assert similarity("  luis AMADEO", "Luis Amadeo") == 100

    def test_containment(self):
        assert similarity("Rob Smith", "Rob Smithson") == 90

    def test_same_given_and_surname(self):
        """A middle name does not prevent a full-name match."""
        assert similarity("John Adam Smith", "John Smith") == 95

    def test_nickname_scores_surname_floor(self):
        assert similarity("Bob Smith", "Robert Smith") == 80

    def test_close_given_names_score_above_floor(self):
        assert similarity("Jonathan Smith", "Jonathon Smith") == 88

    def test_initial_and_surname(self):
        assert similarity("J. Doe", "John Doe") == 80
        assert similarity("J. Doe", "Jane Doe") == 80

    def test_different_people(self):
        assert similarity("Alice Wong", "Brian Kelly") < 50

    def test_empty_name_never_contains(self):
        assert similarity("", "John Smith") == 0
        assert similarity(None, "John Smith") == 0

    def test_single_token_uses_edit_similarity(self):
        assert similarity("Madonna", "Madona") == edit_distance_similarity("madonna", "madona")
