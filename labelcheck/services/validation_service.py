"""Validation service — orchestrates the full comparison pipeline.

For each submission, the pipeline:
  1. Indexes OCR words across all images
  2. Builds the combined text with per-image headers
  3. Resolves the beverage type (given, or detected from the text)
  4. Classifies fields (search cascade or extractors + elimination)
  5. Locates each field's bounding box on the images
  6. Classifies image roles (front / back / other)
  7. Compares every expected field against what was read off the label
  8. Rolls the per-field statuses up into an overall status

Everything here is deterministic: the same OCR input and expected values
always give the same report. Timings are logged, never returned.
"""

import logging
import time

from labelcheck.comparison.field_comparator import compare_field
from labelcheck.matching.span_matcher import locate_fields
from labelcheck.matching.token_index import build_indexed_words
from labelcheck.models.schemas import FieldReport, OcrResult, ValidationReport
from labelcheck.services.beverage_detector import detect_beverage_type_from_text
from labelcheck.services.image_classifier import classify_images_from_ocr
from labelcheck.services.rule_classifier import rule_classify
from labelcheck.utils.gov_warning_text import CANONICAL_WARNING
from labelcheck.validators.validator_registry import canonical_beverage_type, get_validator

logger = logging.getLogger(__name__)


def build_combined_text(ocr_results: list[OcrResult]) -> str:
    """All images' text in one string, each under a "--- Image N ---" header."""
    return "\n\n".join(
        f"--- Image {index + 1} ---\n{result.full_text}"
        for index, result in enumerate(ocr_results)
    )


def clean_expected_values(expected_values: dict[str, str] | None) -> dict[str, str]:
    """Drop blank values; keep the caller's field order."""
    return {
        field_name: value.strip()
        for field_name, value in (expected_values or {}).items()
        if value and value.strip()
    }


def build_expected_fields(expected_values: dict[str, str] | None, beverage_type: str | None) -> dict[str, str]:
    """Expected values the label is compared against.

    Blank values are dropped. When the beverage type is known and the
    caller gave no health warning, the statutory warning text is expected:
    every label must carry it word for word.
    """
    expected = clean_expected_values(expected_values)
    if beverage_type and "health_warning" not in expected:
        expected["health_warning"] = CANONICAL_WARNING
    return expected


def resolve_beverage_type(beverage_type: str | None, combined_text: str) -> tuple[str | None, str | None]:
    """Return (beverage_type used, beverage_type detected from text).

    Raises:
        ValueError: beverage_type is given but not a known type or alias.
    """
    detected = detect_beverage_type_from_text(combined_text)
    if not beverage_type:
        return detected, detected

    canonical = canonical_beverage_type(beverage_type)
    if canonical is None:
        raise ValueError(f"Unknown beverage type: {beverage_type}")
    return canonical, detected


def validate_submission(
    ocr_results: list[OcrResult],
    beverage_type: str | None = None,
    expected_values: dict[str, str] | None = None,
    container_size_ml: int | None = None,
) -> ValidationReport:
    """Run the full pipeline for one submission.

    Args:
        ocr_results: One OcrResult per label image, in upload order.
        beverage_type: Canonical name or alias; detected from the text when None.
        expected_values: Application data, field name -> expected value.
        container_size_ml: Declared container size, checked against the standards of fill.

    Returns:
        ValidationReport with one FieldReport per classified field. The
        overall status is only set when the beverage type is known.
    """
    started = time.perf_counter()

    words = build_indexed_words(ocr_results)
    combined_text = build_combined_text(ocr_results)
    resolved_type, detected_type = resolve_beverage_type(beverage_type, combined_text)

    classify_started = time.perf_counter()
    classification = rule_classify(combined_text, resolved_type, clean_expected_values(expected_values))
    classify_ms = (time.perf_counter() - classify_started) * 1000

    locate_started = time.perf_counter()
    extracted_fields = locate_fields(classification.fields, words, ocr_results)
    locate_ms = (time.perf_counter() - locate_started) * 1000

    image_classifications = classify_images_from_ocr(ocr_results)

    expected = build_expected_fields(expected_values, resolved_type)
    reports = []
    for extracted in extracted_fields:
        expected_value = expected.get(extracted.field_name)
        comparison = None
        if expected_value is not None:
            comparison = compare_field(extracted.field_name, expected_value, extracted.value)
        reports.append(FieldReport(
            field_name=extracted.field_name,
            expected=expected_value,
            extracted=extracted,
            comparison=comparison,
        ))

    overall = None
    validator = get_validator(resolved_type) if resolved_type else None
    if validator is not None:
        item_statuses = [(r.field_name, r.comparison.status) for r in reports if r.comparison is not None]
        overall = validator.determine_overall_status(item_statuses, container_size_ml)

    total_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"Validated {len(ocr_results)} image(s), {len(words)} words, type={resolved_type}: "
        f"{overall.status if overall else 'no overall status'} "
        f"(classify {classify_ms:.1f}ms, locate {locate_ms:.1f}ms, total {total_ms:.1f}ms)"
    )

    return ValidationReport(
        beverage_type=resolved_type,
        detected_beverage_type=detected_type,
        fields=reports,
        image_classifications=image_classifications,
        overall=overall,
    )
