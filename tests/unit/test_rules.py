"""Unit tests for the expected-value search rules, using crafted SearchContext objects."""

import pytest

from labelcheck.rules.rule_registry import SEARCH_CASCADE
from labelcheck.rules.text_search_rules import (
    SearchContext,
    ampersand_substring,
    best_fuzzy_window,
    collapsed_space_substring,
    exact_substring,
    fuzzy_window,
    fuzzy_window_ampersand,
    fuzzy_window_sizes,
    punctuation_stripped_collapsed_substring,
    punctuation_stripped_substring,
    token_overlap,
)


def _first_hit(ocr_text: str, expected: str):
    """Walk the cascade like the classifier does; return (rule_id, hit)."""
    ctx = SearchContext(ocr_text, expected)
    for rule_id, rule_fn in SEARCH_CASCADE.items():
        hit = rule_fn(ctx)
        if hit is not None:
            return rule_id, hit
    return None, None


class TestCascadeOrder:
    def test_strict_rules_first(self):
        assert list(SEARCH_CASCADE) == [
            "EXACT_SUBSTRING",
            "AMPERSAND_SUBSTRING",
            "COLLAPSED_SPACE_SUBSTRING",
            "PUNCTUATION_STRIPPED_SUBSTRING",
            "PUNCTUATION_STRIPPED_COLLAPSED_SUBSTRING",
            "FUZZY_WINDOW",
            "FUZZY_WINDOW_AMPERSAND",
            "TOKEN_OVERLAP",
        ]


class TestExactSubstring:
    def test_case_and_line_breaks_ignored(self):
        rule_id, hit = _first_hit("BULLEIT\nBOURBON\nWHISKEY", "Bourbon Whiskey")
        assert rule_id == "EXACT_SUBSTRING"
        assert hit.confidence == 95

    def test_miss(self):
        assert exact_substring(SearchContext("BULLEIT", "Buffalo Trace")) is None


class TestAmpersandSubstring:
    def test_ampersand_on_label(self):
        rule_id, hit = _first_hit("PRODUCED & BOTTLED BY", "Produced and Bottled by")
        assert rule_id == "AMPERSAND_SUBSTRING"
        assert hit.confidence == 93

    def test_miss(self):
        assert ampersand_substring(SearchContext("PRODUCED BY", "Produced and Bottled by")) is None


class TestCollapsedSpaceSubstring:
    def test_unit_without_space(self):
        rule_id, hit = _first_hit("NET CONTENTS 750ML", "750 mL")
        assert rule_id == "COLLAPSED_SPACE_SUBSTRING"
        assert hit.confidence == 90

    def test_miss(self):
        assert collapsed_space_substring(SearchContext("700ML", "750 mL")) is None


class TestPunctuationStripped:
    def test_trailing_periods(self):
        rule_id, hit = _first_hit("45% ALC. BY VOL.", "45% Alc by Vol")
        assert rule_id == "PUNCTUATION_STRIPPED_SUBSTRING"
        assert hit.confidence == 88

    def test_stripped_and_collapsed(self):
        rule_id, hit = _first_hit("12FL.OZ.", "12 fl oz")
        assert rule_id == "PUNCTUATION_STRIPPED_COLLAPSED_SUBSTRING"
        assert hit.confidence == 85

    def test_miss(self):
        ctx = SearchContext("45% ALC. BY VOL.", "40% Alc by Vol")
        assert punctuation_stripped_substring(ctx) is None
        assert punctuation_stripped_collapsed_substring(ctx) is None


class TestFuzzyWindow:
    @pytest.mark.parametrize("word_count, sizes", [
        (1, {3, 5}),
        (4, {4, 6}),
        (10, {10, 12}),
        (20, {20, 24}),
    ])
    def test_window_sizes(self, word_count, sizes):
        assert fuzzy_window_sizes(word_count) == sizes

    def test_ocr_typo(self):
        rule_id, hit = _first_hit("DISTILLED AND BOTILED BY JIM BEAM", "Distilled and Bottled by")
        assert rule_id == "FUZZY_WINDOW"
        # 16 of 18 bigrams shared: 32 / 34
        assert hit.confidence == 94

    def test_best_window_on_short_text(self):
        assert best_fuzzy_window("bulleit", "bulleit") == 1.0

    def test_ampersand_variant(self):
        hit = fuzzy_window_ampersand(SearchContext("PRODUCED & BOTILED BY", "Produced and Bottled by"))
        assert hit is not None
        assert hit.confidence >= 70
        assert "ampersand" in hit.reasoning

    def test_unrelated_text(self):
        assert fuzzy_window(SearchContext("BUFFALO TRACE KENTUCKY", "Maker's Mark")) is None


class TestTokenOverlap:
    def test_value_split_across_lines(self):
        ocr = "37.5%\nKENTUCKY STRAIGHT\nALC.\nFINEST QUALITY\nVOL.\nBATCH 75\nPROOF"
        rule_id, hit = _first_hit(ocr, "37.5% Alc. By Vol. (75 Proof)")
        assert rule_id == "TOKEN_OVERLAP"
        assert hit.confidence == 85
        assert "4/4" in hit.reasoning

    def test_too_few_significant_tokens(self):
        assert token_overlap(SearchContext("OLD TOM", "Old Tom")) is None

    def test_too_few_tokens_found(self):
        ctx = SearchContext("KENTUCKY BOURBON", "Kentucky Straight Rye Whiskey")
        assert token_overlap(ctx) is None


class TestNotFound:
    def test_cascade_exhausted(self):
        assert _first_hit("BUFFALO TRACE", "Maker's Mark") == (None, None)
