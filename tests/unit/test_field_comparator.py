"""Unit tests for the field comparator and value normalizers."""

import pytest

from labelcheck.comparison.field_comparator import FIELD_MATCH_STRATEGY, compare_field
from labelcheck.comparison.normalizers import (
    normalize_age_statement,
    normalize_alcohol_content,
    normalize_net_contents,
)
from labelcheck.utils.gov_warning_text import CANONICAL_WARNING


class TestNotFound:
    @pytest.mark.parametrize("field_name", [*FIELD_MATCH_STRATEGY, "unknown_field"])
    @pytest.mark.parametrize("extracted", [None, "", "   "])
    def test_missing_value_is_not_found(self, field_name, extracted):
        result = compare_field(field_name, "some value", extracted)
        assert result.status == "not_found"
        assert result.confidence == 0
        assert field_name in result.reasoning

    @pytest.mark.parametrize("match_type", ["exact", "fuzzy", "normalized", "contains", "enum"])
    def test_missing_value_with_explicit_strategy(self, match_type):
        result = compare_field("brand_name", "Bulleit", None, match_type=match_type)
        assert result.status == "not_found"
        assert result.confidence == 0


class TestExact:
    def test_health_warning_exact(self):
        result = compare_field("health_warning", CANONICAL_WARNING, CANONICAL_WARNING)
        assert result.status == "match"
        assert result.confidence == 100

    def test_whitespace_differences_ignored(self):
        spaced = CANONICAL_WARNING.replace(" ", "\n", 3)
        result = compare_field("health_warning", CANONICAL_WARNING, spaced)
        assert result.confidence == 100

    def test_health_warning_case_insensitive(self):
        result = compare_field("health_warning", CANONICAL_WARNING, CANONICAL_WARNING.upper())
        assert result.status == "match"
        assert result.confidence == 85
        assert "all caps" in result.reasoning

    def test_health_warning_ocr_typo(self):
        garbled = CANONICAL_WARNING.replace("Surgeon General", "Surgeon Generl")
        result = compare_field("health_warning", CANONICAL_WARNING, garbled)
        assert result.status == "match"
        assert 72 <= result.confidence < 85

    def test_health_warning_mismatch(self):
        result = compare_field("health_warning", CANONICAL_WARNING, "GOVERNMENT WARNING: Drink responsibly.")
        assert result.status == "mismatch"
        assert result.confidence == 90

    def test_vintage_year_digits(self):
        result = compare_field("vintage_year", "2019", "Vintage 2019")
        assert result.status == "match"
        assert result.confidence == 95

    def test_vintage_year_mismatch(self):
        result = compare_field("vintage_year", "2019", "2018")
        assert result.status == "mismatch"


class TestFuzzy:
    def test_similar_names_match(self):
        result = compare_field("brand_name", "Jack Daniels", "Jack Daniel's")
        assert result.status == "match"
        assert result.confidence == 87

    def test_containment(self):
        result = compare_field("brand_name", "Bulleit", "Bulleit Frontier Whiskey")
        assert result.status == "match"
        # 7 / 24 characters * 85
        assert result.confidence == 25
        assert "containment" in result.reasoning

    def test_different_names(self):
        result = compare_field("brand_name", "Maker's Mark", "Buffalo Trace")
        assert result.status == "mismatch"
        assert result.confidence > 0
        assert "brand_name" in result.reasoning

    def test_unknown_field_defaults_to_fuzzy(self):
        result = compare_field("bottle_color", "Amber", "AMBER")
        assert result.status == "match"
        assert result.confidence == 100

    def test_explicit_match_type_overrides_table(self):
        result = compare_field("brand_name", "France", "Product of France", match_type="contains")
        assert result.status == "match"
        assert result.confidence == 90


class TestNormalized:
    def test_proof_equals_percentage(self):
        result = compare_field("alcohol_content", "45% Alc./Vol.", "90 Proof")
        assert result.status == "match"
        assert result.confidence == 100

    def test_alcohol_within_tolerance(self):
        result = compare_field("alcohol_content", "40%", "40.3% ABV")
        assert result.status == "match"
        assert result.confidence == 90

    def test_alcohol_outside_tolerance(self):
        result = compare_field("alcohol_content", "40%", "43% Alc/Vol")
        assert result.status == "mismatch"
        assert result.confidence == 95

    def test_unparsable_alcohol_falls_back_to_fuzzy(self):
        result = compare_field("alcohol_content", "forty percent", "Forty Percent")
        assert result.status == "match"
        assert result.confidence == 100

    def test_metric_units(self):
        result = compare_field("net_contents", "750 mL", "0.75 L")
        assert result.status == "match"
        assert result.confidence == 100

    def test_fluid_ounces_within_tolerance(self):
        result = compare_field("net_contents", "750 mL", "25.4 FL OZ")
        assert result.status == "match"
        assert result.confidence == 90

    def test_net_contents_mismatch(self):
        result = compare_field("net_contents", "750 mL", "1 L")
        assert result.status == "mismatch"
        assert result.confidence == 95

    def test_age_statement(self):
        result = compare_field("age_statement", "12 Years Old", "Aged 12 Years")
        assert result.status == "match"
        assert result.confidence == 100

    def test_age_statement_mismatch(self):
        result = compare_field("age_statement", "Aged 10", "12 years")
        assert result.status == "mismatch"


class TestContains:
    def test_substring(self):
        result = compare_field("country_of_origin", "France", "Product of France")
        assert result.status == "match"
        assert result.confidence == 90

    def test_word_overlap(self):
        result = compare_field("country_of_origin", "Republic of Ireland", "Ireland Republic")
        assert result.status == "match"
        # 2 of 3 words * 80
        assert result.confidence == 53

    def test_mismatch(self):
        result = compare_field("country_of_origin", "Mexico", "Product of France")
        assert result.status == "mismatch"
        assert result.confidence == 85


class TestEnum:
    def test_ampersand_variant(self):
        result = compare_field("qualifying_phrase", "Distilled and Bottled by", "DISTILLED & BOTTLED BY")
        assert result.status == "match"
        assert result.confidence == 95

    def test_compound_phrase_is_not_its_suffix(self):
        result = compare_field("qualifying_phrase", "Bottled by", "Produced and Bottled by")
        assert result.status == "mismatch"
        assert result.confidence == 90

    def test_unknown_phrase_falls_back_to_fuzzy(self):
        result = compare_field("qualifying_phrase", "Hand Crafted by", "HAND CRAFTED BY")
        assert result.status == "match"
        assert result.confidence == 100


class TestNormalizers:
    def test_proof(self):
        assert normalize_alcohol_content("90 Proof") == 45.0

    def test_percentage(self):
        assert normalize_alcohol_content("12.5% Alc./Vol.") == 12.5

    def test_no_number(self):
        assert normalize_alcohol_content("Alc./Vol.") is None

    @pytest.mark.parametrize("value, expected_ml", [
        ("750 mL", 750.0),
        ("750ml", 750.0),
        ("75 cL", 750.0),
        ("0.75 L", 750.0),
        ("1.75 Liters", 1750.0),
        ("1,750 mL", 1750.0),
        ("12 FL. OZ.", 354.88),
        ("750 mL (25.4 FL OZ)", 750.0),
    ])
    def test_net_contents(self, value, expected_ml):
        assert normalize_net_contents(value) == pytest.approx(expected_ml)

    def test_unknown_unit(self):
        assert normalize_net_contents("750 bottles") is None

    def test_age(self):
        assert normalize_age_statement("Aged 4 Years") == 4
        assert normalize_age_statement("Aged 10") == 10
        assert normalize_age_statement("No age") is None
