"""Unit tests for the rule-based field classifier."""

from labelcheck.services.rule_classifier import (
    classify_with_application_data,
    rule_classify,
    search_expected_value,
)
from labelcheck.validators.validator_registry import all_fields

SPIRITS_OCR = "--- Image 1 ---\nBULLEIT\nFRONTIER WHISKEY\n45% Alc./Vol.\n750 mL"


def _by_name(fields):
    return {field.field_name: field for field in fields}


class TestSearchExpectedValue:
    def test_found_returns_expected_value(self):
        result = search_expected_value("brand_name", "Bulleit", "BULLEIT BOURBON")
        assert result.value == "Bulleit"
        assert result.confidence == 95

    def test_not_found(self):
        result = search_expected_value("brand_name", "Maker's Mark", "BULLEIT BOURBON")
        assert result.value is None
        assert result.confidence == 0
        assert "not found" in result.reasoning

    def test_blank_expected_value(self):
        result = search_expected_value("brand_name", "  ", "BULLEIT BOURBON")
        assert result.value is None
        assert "No expected value" in result.reasoning


class TestWithApplicationData:
    def test_remaining_vocabulary_is_extracted(self):
        fields = classify_with_application_data(SPIRITS_OCR, "distilled_spirits", {"brand_name": "Bulleit"})
        names = [field.field_name for field in fields]
        assert names[0] == "brand_name"
        assert names[1:3] == ["class_type", "alcohol_content"]
        assert len(names) == 12
        assert _by_name(fields)["net_contents"].value == "750 mL"

    def test_unknown_type_only_searches_given_fields(self):
        fields = classify_with_application_data(SPIRITS_OCR, None, {"net_contents": "750 mL"})
        assert [field.field_name for field in fields] == ["net_contents"]


class TestWithoutApplicationData:
    def test_two_pass_extraction(self):
        result = rule_classify(SPIRITS_OCR, "distilled_spirits")
        fields = _by_name(result.fields)
        assert fields["alcohol_content"].value == "45% Alc./Vol."
        assert fields["net_contents"].value == "750 mL"
        assert fields["brand_name"].value == "BULLEIT"
        assert fields["brand_name"].confidence == 70
        assert fields["fanciful_name"].value == "FRONTIER WHISKEY"
        assert fields["standards_of_fill"].value is None

    def test_elimination_fields_come_last(self):
        result = rule_classify(SPIRITS_OCR, "distilled_spirits")
        assert [field.field_name for field in result.fields][-2:] == ["brand_name", "fanciful_name"]

    def test_unknown_type_uses_every_field(self):
        result = rule_classify(SPIRITS_OCR, None)
        assert sorted(field.field_name for field in result.fields) == sorted(all_fields())

    def test_result_metadata(self):
        result = rule_classify(SPIRITS_OCR, "distilled_spirits", {})
        assert result.detected_beverage_type == "distilled_spirits"
        assert result.image_classifications == []
