from labelcheck.extractors.common_extractors import (
    extract_age_statement,
    extract_alcohol_content,
    extract_appellation,
    extract_class_type,
    extract_country_of_origin,
    extract_grape_varietal,
    extract_health_warning,
    extract_name_and_address,
    extract_net_contents,
    extract_qualifying_phrase,
    extract_state_of_distillation,
    extract_sulfite_declaration,
    extract_vintage_year,
    make_field,
)
from labelcheck.models.schemas import RuleClassifiedField

# Field name -> extractor taking the combined OCR text.
# class_type is not listed: it also needs the beverage type (see extract_single_field).
EXTRACTOR_REGISTRY: dict[str, callable] = {
    "health_warning": extract_health_warning,
    "qualifying_phrase": extract_qualifying_phrase,
    "sulfite_declaration": extract_sulfite_declaration,
    "alcohol_content": extract_alcohol_content,
    "net_contents": extract_net_contents,
    "vintage_year": extract_vintage_year,
    "age_statement": extract_age_statement,
    "country_of_origin": extract_country_of_origin,
    "grape_varietal": extract_grape_varietal,
    "appellation_of_origin": extract_appellation,
    "name_and_address": extract_name_and_address,
    "state_of_distillation": extract_state_of_distillation,
}

# Proper nouns with no pattern to search for; filled by elimination.
ELIMINATION_FIELDS = ("brand_name", "fanciful_name")


def extract_single_field(field_name: str, ocr_text: str, beverage_type: str | None = None) -> RuleClassifiedField:
    """Run the extractor registered for one field.

    Always returns a RuleClassifiedField; fields with no extractor come
    back with value=None and a reasoning saying why.
    """
    if field_name == "class_type":
        return extract_class_type(ocr_text, beverage_type)

    extractor = EXTRACTOR_REGISTRY.get(field_name)
    if extractor is not None:
        return extractor(ocr_text)

    if field_name in ELIMINATION_FIELDS:
        return make_field(field_name, None, 0, f"{field_name} requires two-pass extraction context.")
    if field_name == "standards_of_fill":
        return make_field(field_name, None, 0, "Computed from net_contents, not extracted from label.")
    return make_field(field_name, None, 0, f'No extractor for field "{field_name}".')
