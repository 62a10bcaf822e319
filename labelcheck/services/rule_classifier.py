"""Rule-based field classifier.

Two modes, picked by whether application data (expected values) is given:

  - With expected values, classification is a text search problem: walk
    the SEARCH_CASCADE for each expected value and stop at the first rule
    that finds it in the OCR text.
  - Without expected values, per-field extractors read what they can
    (Pass 1), then brand and fanciful name are derived by elimination
    from what is left over (Pass 2).
"""

import logging

from labelcheck.extractors.elimination import extract_brand_name, extract_fanciful_name
from labelcheck.extractors.extractor_registry import ELIMINATION_FIELDS, extract_single_field
from labelcheck.extractors.common_extractors import make_field
from labelcheck.models.schemas import RuleClassificationResult, RuleClassifiedField
from labelcheck.rules.rule_registry import SEARCH_CASCADE
from labelcheck.rules.text_search_rules import SearchContext
from labelcheck.validators.validator_registry import all_fields, get_validator

logger = logging.getLogger(__name__)


def _vocabulary(beverage_type: str | None) -> list[str]:
    validator = get_validator(beverage_type) if beverage_type else None
    if validator is None:
        return all_fields()
    return validator.fields


def search_expected_value(field_name: str, expected_value: str, ocr_text: str) -> RuleClassifiedField:
    """Run the search cascade for one expected value."""
    if not expected_value or not expected_value.strip():
        return make_field(field_name, None, 0, "No expected value provided in application data.")

    ctx = SearchContext(ocr_text, expected_value)
    for rule_id, rule_fn in SEARCH_CASCADE.items():
        hit = rule_fn(ctx)
        if hit is not None:
            logger.debug(f"{field_name}: {rule_id} matched ({hit.confidence})")
            return make_field(field_name, expected_value, hit.confidence, hit.reasoning)

    logger.debug(f"{field_name}: no rule matched {expected_value!r}")
    return make_field(field_name, None, 0, "Expected value not found in OCR text.")


def classify_with_application_data(
    ocr_text: str,
    beverage_type: str | None,
    application_data: dict[str, str],
) -> list[RuleClassifiedField]:
    """Search for every expected value, then extract the remaining vocabulary fields."""
    fields = [
        search_expected_value(field_name, expected_value, ocr_text)
        for field_name, expected_value in application_data.items()
    ]

    validator = get_validator(beverage_type) if beverage_type else None
    if validator is not None:
        covered = set(application_data)
        for field_name in validator.fields:
            if field_name not in covered:
                fields.append(extract_single_field(field_name, ocr_text, validator.beverage_type))

    return fields


def classify_without_application_data(ocr_text: str, beverage_type: str | None) -> list[RuleClassifiedField]:
    """Two-pass extraction.

    Pass 1 runs the field extractors for everything except brand and
    fanciful name. Pass 2 hands the values Pass 1 claimed to the
    elimination stage.
    """
    field_names = _vocabulary(beverage_type)
    validator = get_validator(beverage_type) if beverage_type else None
    canonical_type = validator.beverage_type if validator else None

    fields = [
        extract_single_field(field_name, ocr_text, canonical_type)
        for field_name in field_names
        if field_name not in ELIMINATION_FIELDS
    ]
    claimed_values = [field.value for field in fields if field.value]

    brand_name = None
    if "brand_name" in field_names:
        brand = extract_brand_name(ocr_text, claimed_values)
        brand_name = brand.value
        fields.append(brand)

    if "fanciful_name" in field_names:
        fields.append(extract_fanciful_name(ocr_text, claimed_values, brand_name))

    return fields


def rule_classify(
    ocr_text: str,
    beverage_type: str | None,
    application_data: dict[str, str] | None = None,
) -> RuleClassificationResult:
    """Classify label fields from OCR text with regex, dictionaries and fuzzy search.

    Image classifications are left empty; the image role classifier
    fills them separately.
    """
    if application_data:
        fields = classify_with_application_data(ocr_text, beverage_type, application_data)
    else:
        fields = classify_without_application_data(ocr_text, beverage_type)

    return RuleClassificationResult(
        fields=fields,
        image_classifications=[],
        detected_beverage_type=beverage_type,
    )
