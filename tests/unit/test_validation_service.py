"""Integration-level unit tests for the validation service pipeline."""

import pytest

from labelcheck.models.schemas import OcrResult, OcrVertex, OcrWord
from labelcheck.services.validation_service import (
    build_combined_text,
    build_expected_fields,
    clean_expected_values,
    resolve_beverage_type,
    validate_submission,
)
from labelcheck.utils.gov_warning_text import CANONICAL_WARNING


def _make_result(text: str) -> OcrResult:
    """One OcrWord per token, laid out line by line on a 1000x1000 image."""
    words = []
    for line_number, line in enumerate(text.split("\n")):
        for i, token in enumerate(line.split()):
            x, y = 20 + i * 40, 20 + line_number * 30
            words.append(OcrWord(
                text=token,
                bounding_poly=[
                    OcrVertex(x=x, y=y),
                    OcrVertex(x=x + 35, y=y),
                    OcrVertex(x=x + 35, y=y + 20),
                    OcrVertex(x=x, y=y + 20),
                ],
                confidence=0.9,
            ))
    return OcrResult(words=words, full_text=text, image_width=1000, image_height=1000)


FRONT_TEXT = "BULLEIT\nBOURBON\nFRONTIER WHISKEY"
BACK_TEXT = (
    f"{CANONICAL_WARNING}\n"
    "45% Alc./Vol.\n"
    "750 mL\n"
    "DISTILLED AND BOTTLED BY BULLEIT DISTILLING CO"
)

EXPECTED = {
    "brand_name": "Bulleit",
    "alcohol_content": "45% Alc./Vol.",
    "net_contents": "750 mL",
}


def _images():
    return [_make_result(FRONT_TEXT), _make_result(BACK_TEXT)]


def _reports(report):
    return {field.field_name: field for field in report.fields}


class TestHelpers:
    def test_combined_text_headers(self):
        combined = build_combined_text([_make_result("A"), _make_result("B")])
        assert combined == "--- Image 1 ---\nA\n\n--- Image 2 ---\nB"

    def test_blank_expected_values_dropped(self):
        assert clean_expected_values({"brand_name": " Bulleit ", "fanciful_name": "  "}) == {"brand_name": "Bulleit"}
        assert clean_expected_values(None) == {}

    def test_health_warning_expected_when_type_known(self):
        assert build_expected_fields({}, "wine") == {"health_warning": CANONICAL_WARNING}
        assert build_expected_fields({}, None) == {}

    def test_caller_health_warning_kept(self):
        expected = build_expected_fields({"health_warning": "GOVERNMENT WARNING: custom"}, "wine")
        assert expected["health_warning"] == "GOVERNMENT WARNING: custom"

    def test_alias_resolved(self):
        assert resolve_beverage_type("spirits", "") == ("distilled_spirits", None)

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            resolve_beverage_type("cider", "")


class TestValidationPipeline:
    def test_compliant_spirits(self):
        report = validate_submission(_images(), beverage_type="spirits", expected_values=EXPECTED)
        fields = _reports(report)

        assert report.beverage_type == "distilled_spirits"
        assert report.detected_beverage_type == "distilled_spirits"
        assert report.overall.status == "approved"
        assert report.overall.deadline_days is None

        for name in ("brand_name", "alcohol_content", "net_contents", "health_warning"):
            assert fields[name].comparison.status == "match"
        assert fields["health_warning"].expected == CANONICAL_WARNING
        assert fields["class_type"].comparison is None

    def test_brand_located_on_front_image(self):
        report = validate_submission(_images(), beverage_type="spirits", expected_values=EXPECTED)
        brand = _reports(report)["brand_name"].extracted
        assert brand.image_index == 0
        assert brand.bounding_box is not None
        assert brand.bounding_box.x == pytest.approx(0.02)

    def test_box_stays_inside_image(self):
        word = OcrWord(text="BULLEIT", bounding_poly=[
            OcrVertex(x=-10, y=-4), OcrVertex(x=130, y=-4),
            OcrVertex(x=130, y=20), OcrVertex(x=-10, y=20),
        ])
        ocr = [OcrResult(words=[word], full_text="BULLEIT", image_width=100, image_height=100)]
        report = validate_submission(ocr, beverage_type="spirits", expected_values={"brand_name": "Bulleit"})
        box = _reports(report)["brand_name"].extracted.bounding_box

        assert 0 <= box.x and box.x + box.width <= 1
        assert 0 <= box.y and box.y + box.height <= 1

    def test_image_roles(self):
        report = validate_submission(_images(), beverage_type="spirits", expected_values=EXPECTED)
        assert [c.image_type for c in report.image_classifications] == ["front", "back"]

    def test_missing_brand_needs_correction(self):
        expected = {**EXPECTED, "brand_name": "Maker's Mark"}
        report = validate_submission(_images(), beverage_type="spirits", expected_values=expected)
        brand = _reports(report)["brand_name"]
        assert brand.comparison.status == "not_found"
        assert report.overall.status == "needs_correction"
        assert report.overall.deadline_days == 30

    def test_container_size_rejected(self):
        report = validate_submission(
            _images(), beverage_type="spirits", expected_values=EXPECTED, container_size_ml=800
        )
        assert report.overall.status == "rejected"

    def test_detected_wine_without_warning_is_rejected(self):
        ocr = [_make_result("2019 CABERNET SAUVIGNON\nNAPA VALLEY\nCONTAINS SULFITES")]
        report = validate_submission(ocr)
        fields = _reports(report)

        assert report.beverage_type == "wine"
        assert fields["grape_varietal"].extracted.value == "Cabernet Sauvignon"
        assert fields["grape_varietal"].comparison is None
        assert fields["health_warning"].comparison.status == "not_found"
        assert report.overall.status == "rejected"

    def test_undetected_type_has_no_overall_status(self):
        report = validate_submission([_make_result("HELLO")])
        assert report.beverage_type is None
        assert report.overall is None
        assert all(field.comparison is None for field in report.fields)

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError):
            validate_submission(_images(), beverage_type="cider")

    def test_deterministic(self):
        first = validate_submission(_images(), beverage_type="spirits", expected_values=EXPECTED)
        second = validate_submission(_images(), beverage_type="spirits", expected_values=EXPECTED)
        assert first.model_dump() == second.model_dump()
