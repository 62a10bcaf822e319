"""Unit tests for text normalization and similarity helpers."""

import pytest

from labelcheck.utils.text_normalization import (
    bigram_similarity,
    find_longest_term,
    fuzzy_match,
    normalize_ampersand,
    normalize_for_matching,
    normalize_whitespace,
    percent,
    round_half_up,
    strip_sentence_punctuation,
)


class TestNormalizeForMatching:
    def test_lowercases(self):
        assert normalize_for_matching("BULLEIT Bourbon") == "bulleit bourbon"

    def test_keeps_decimal_point(self):
        assert normalize_for_matching("12.5%") == "12.5"

    def test_drops_trailing_period(self):
        assert normalize_for_matching("Vol.") == "vol"

    def test_slash_becomes_space(self):
        assert normalize_for_matching("ALC/VOL") == "alc vol"

    def test_ampersand_and_quotes_removed(self):
        assert normalize_for_matching("Maker’s & Co") == "maker s co"

    def test_collapses_whitespace(self):
        assert normalize_for_matching("  brand \n  name ") == "brand name"

    def test_underscore_becomes_space(self):
        assert normalize_for_matching("OLD_FORESTER") == "old forester"

    def test_punctuation_only_is_empty(self):
        assert normalize_for_matching("/ ( ) .") == ""

    @pytest.mark.parametrize("text", [
        "",
        "45% Alc./Vol. (90 Proof)",
        "GOVERNMENT WARNING: (1) According to the Surgeon General,",
        "12. 5%",
        "..5..",
        "Produced & Bottled by",
        "Rosé — Napa",
        "1,750 mL",
        "OLD__FORESTER_",
    ])
    def test_idempotent(self, text):
        once = normalize_for_matching(text)
        assert normalize_for_matching(once) == once


class TestSmallHelpers:
    def test_normalize_whitespace(self):
        assert normalize_whitespace(" a \t b\n\nc ") == "a b c"

    def test_normalize_ampersand(self):
        assert normalize_ampersand("Produced & Bottled by") == "Produced and Bottled by"

    def test_strip_sentence_punctuation(self):
        assert strip_sentence_punctuation("Alc. by Vol.; 750 mL!") == "Alc by Vol 750 mL"


class TestBigramSimilarity:
    def test_case_insensitive_equal(self):
        assert bigram_similarity("Bulleit", "BULLEIT") == 1.0

    def test_single_characters_only_match_when_equal(self):
        assert bigram_similarity("a", "b") == 0.0
        assert bigram_similarity("a", "A") == 1.0

    def test_dice_coefficient(self):
        # ni ig gh ht / na ac ch ht -> one shared bigram out of 8
        assert bigram_similarity("night", "nacht") == pytest.approx(0.25)

    def test_fuzzy_match_tolerates_apostrophe(self):
        is_match, similarity = fuzzy_match("Jack Daniels", "Jack Daniel's")
        assert is_match is True
        assert similarity == pytest.approx(20 / 23)

    def test_fuzzy_match_rejects_different_names(self):
        is_match, _ = fuzzy_match("Maker's Mark", "Buffalo Trace")
        assert is_match is False


class TestRounding:
    def test_half_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1

    def test_below_half_rounds_down(self):
        assert round_half_up(2.49) == 2

    def test_percent(self):
        assert percent(0.875) == 88
        assert percent(1.0) == 100


class TestFindLongestTerm:
    def test_longest_term_wins(self):
        terms = ["Sauvignon", "Cabernet Sauvignon"]
        assert find_longest_term("2019 CABERNET SAUVIGNON", terms) == "Cabernet Sauvignon"

    def test_whole_words_only(self):
        assert find_longest_term("Ginger Beer", ["Gin"]) is None

    def test_no_match(self):
        assert find_longest_term("nothing here", ["Merlot"]) is None
