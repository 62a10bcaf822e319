"""Field comparator — final say on whether a label value matches the application.

compare_field() picks a comparison strategy per field name (overridable
with match_type) and returns a ComparisonResult. Every result carries a
reasoning string naming the field and what the verdict was based on;
reviewers read it, so it is part of the output, not logging.
"""

import logging
from typing import Callable, Literal, Optional

from labelcheck.comparison.normalizers import (
    normalize_age_statement,
    normalize_alcohol_content,
    normalize_net_contents,
)
from labelcheck.models.schemas import ComparisonResult
from labelcheck.reference.qualifying_phrases import QUALIFYING_PHRASES
from labelcheck.utils.text_normalization import (
    find_longest_term,
    fuzzy_match,
    normalize_ampersand,
    normalize_whitespace,
    percent,
    round_half_up,
)

logger = logging.getLogger(__name__)

MatchType = Literal["exact", "fuzzy", "normalized", "contains", "enum"]

FIELD_MATCH_STRATEGY: dict[str, MatchType] = {
    "health_warning": "exact",
    "brand_name": "fuzzy",
    "fanciful_name": "fuzzy",
    "alcohol_content": "normalized",
    "net_contents": "normalized",
    "class_type": "fuzzy",
    "name_and_address": "fuzzy",
    "qualifying_phrase": "enum",
    "country_of_origin": "contains",
    "grape_varietal": "fuzzy",
    "appellation_of_origin": "fuzzy",
    "vintage_year": "exact",
    "sulfite_declaration": "fuzzy",
    "age_statement": "normalized",
    "state_of_distillation": "fuzzy",
}

# Health warning: bigram similarity that still counts as the statement with OCR noise.
HEALTH_WARNING_SIMILARITY = 0.9
# Alcohol content tolerance, in ABV percentage points.
ABV_TOLERANCE = 0.5
# Net contents tolerance, as a share of the expected volume.
NET_CONTENTS_TOLERANCE = 0.01
# Share of expected words that must appear for a "contains" partial match.
MIN_WORD_OVERLAP = 0.5

_TRUNCATE = 100


def _match(confidence: float, reasoning: str) -> ComparisonResult:
    return ComparisonResult(status="match", confidence=confidence, reasoning=reasoning)


def _mismatch(confidence: float, reasoning: str) -> ComparisonResult:
    return ComparisonResult(status="mismatch", confidence=confidence, reasoning=reasoning)


def compare_exact(field_name: str, expected: str, extracted: str) -> ComparisonResult:
    norm_expected = normalize_whitespace(expected)
    norm_extracted = normalize_whitespace(extracted)

    if norm_expected == norm_extracted:
        return _match(100, f"{field_name} matches exactly after whitespace normalization.")

    if field_name == "vintage_year":
        expected_year = "".join(ch for ch in norm_expected if ch.isdigit())
        extracted_year = "".join(ch for ch in norm_extracted if ch.isdigit())
        if expected_year and expected_year == extracted_year:
            return _match(95, f"{field_name} year values match: {expected_year}.")

    if field_name == "health_warning":
        if norm_expected.lower() == norm_extracted.lower():
            return _match(
                85,
                f"{field_name} matches case-insensitively. Check that the "
                f'"GOVERNMENT WARNING" prefix is in all caps on the label.',
            )

        _, similarity = fuzzy_match(norm_expected, norm_extracted)
        if similarity >= HEALTH_WARNING_SIMILARITY:
            return _match(
                round_half_up(similarity * 80),
                f"{field_name} is very similar ({percent(similarity)}%). Minor OCR discrepancies detected.",
            )

    return _mismatch(
        90,
        f'{field_name} does not match. Expected: "{norm_expected[:_TRUNCATE]}" '
        f'Found: "{norm_extracted[:_TRUNCATE]}"',
    )


def compare_fuzzy(field_name: str, expected: str, extracted: str) -> ComparisonResult:
    is_match, similarity = fuzzy_match(expected, extracted)
    if is_match:
        return _match(percent(similarity), f"{field_name} matches with {percent(similarity)}% similarity.")

    # One side containing the other covers partial OCR reads
    norm_expected = normalize_whitespace(expected).lower()
    norm_extracted = normalize_whitespace(extracted).lower()
    if norm_expected and norm_extracted and (
        norm_expected in norm_extracted or norm_extracted in norm_expected
    ):
        length_ratio = min(len(norm_expected), len(norm_extracted)) / max(len(norm_expected), len(norm_extracted))
        return _match(
            round_half_up(length_ratio * 85),
            f"{field_name} partially matches (containment). Similarity: {percent(length_ratio)}%.",
        )

    return _mismatch(
        round_half_up((1 - similarity) * 90),
        f'{field_name} does not match. Similarity: {percent(similarity)}%. '
        f'Expected: "{expected}" Found: "{extracted}"',
    )


def _compare_alcohol_content(field_name: str, expected: str, extracted: str) -> ComparisonResult:
    expected_abv = normalize_alcohol_content(expected)
    extracted_abv = normalize_alcohol_content(extracted)
    if expected_abv is None or extracted_abv is None:
        logger.debug(f"{field_name}: could not read ABV from {expected!r} / {extracted!r}, using fuzzy")
        return compare_fuzzy(field_name, expected, extracted)

    difference = abs(expected_abv - extracted_abv)
    if difference <= ABV_TOLERANCE:
        return _match(
            100 if difference == 0 else 90,
            f"Alcohol content matches: expected {expected_abv}%, found {extracted_abv}%.",
        )
    return _mismatch(95, f"Alcohol content mismatch: expected {expected_abv}%, found {extracted_abv}%.")


def _compare_net_contents(field_name: str, expected: str, extracted: str) -> ComparisonResult:
    expected_ml = normalize_net_contents(expected)
    extracted_ml = normalize_net_contents(extracted)
    if expected_ml is None or extracted_ml is None:
        logger.debug(f"{field_name}: could not read a volume from {expected!r} / {extracted!r}, using fuzzy")
        return compare_fuzzy(field_name, expected, extracted)

    difference = abs(expected_ml - extracted_ml)
    if difference <= expected_ml * NET_CONTENTS_TOLERANCE:
        return _match(
            100 if difference == 0 else 90,
            f"Net contents matches: expected {expected_ml}mL, found {extracted_ml}mL.",
        )
    return _mismatch(95, f"Net contents mismatch: expected {expected_ml}mL, found {extracted_ml}mL.")


def _compare_age_statement(field_name: str, expected: str, extracted: str) -> ComparisonResult:
    expected_age = normalize_age_statement(expected)
    extracted_age = normalize_age_statement(extracted)
    if expected_age is None or extracted_age is None:
        return compare_fuzzy(field_name, expected, extracted)

    if expected_age == extracted_age:
        return _match(100, f"Age statement matches: {expected_age} years.")
    return _mismatch(95, f"Age statement mismatch: expected {expected_age} years, found {extracted_age} years.")


_NORMALIZED_COMPARATORS: dict[str, Callable[[str, str, str], ComparisonResult]] = {
    "alcohol_content": _compare_alcohol_content,
    "net_contents": _compare_net_contents,
    "age_statement": _compare_age_statement,
}


def compare_normalized(field_name: str, expected: str, extracted: str) -> ComparisonResult:
    comparator = _NORMALIZED_COMPARATORS.get(field_name, compare_fuzzy)
    return comparator(field_name, expected, extracted)


def compare_contains(field_name: str, expected: str, extracted: str) -> ComparisonResult:
    norm_expected = normalize_whitespace(expected).lower()
    norm_extracted = normalize_whitespace(extracted).lower()

    if norm_expected in norm_extracted or norm_extracted in norm_expected:
        return _match(90, f"{field_name} found within extracted text.")

    # Country names are often worded differently ("Product of France" / "France")
    expected_words = norm_expected.split(" ")
    found = [word for word in expected_words if word in norm_extracted]
    overlap = len(found) / len(expected_words)
    if overlap >= MIN_WORD_OVERLAP:
        return _match(
            round_half_up(overlap * 80),
            f"{field_name} partially matches ({', '.join(found)} found in extracted text).",
        )

    return _mismatch(85, f'{field_name} not found in extracted text. Expected: "{expected}" Found: "{extracted}"')


def _resolve_qualifying_phrase(text: str) -> Optional[str]:
    """Dictionary phrase a value refers to.

    A phrase contained in the value wins, longest first, so "Produced and
    Bottled by" is not read as "Bottled by". A truncated value ("and
    bottled by") resolves to the shortest phrase containing it.
    """
    normalized = normalize_ampersand(normalize_whitespace(text).lower())
    phrase = find_longest_term(normalized, QUALIFYING_PHRASES)
    if phrase:
        return phrase

    for phrase in sorted(QUALIFYING_PHRASES, key=len):
        if normalized in phrase.lower():
            return phrase
    return None


def compare_enum(field_name: str, expected: str, extracted: str) -> ComparisonResult:
    if field_name == "qualifying_phrase":
        expected_phrase = _resolve_qualifying_phrase(expected)
        extracted_phrase = _resolve_qualifying_phrase(extracted)

        if expected_phrase and extracted_phrase:
            if expected_phrase == extracted_phrase:
                return _match(95, f'Qualifying phrase matches: "{expected_phrase}".')
            return _mismatch(
                90,
                f'Qualifying phrase mismatch: expected "{expected_phrase}", found "{extracted_phrase}".',
            )

    return compare_fuzzy(field_name, expected, extracted)


STRATEGIES: dict[str, Callable[[str, str, str], ComparisonResult]] = {
    "exact": compare_exact,
    "fuzzy": compare_fuzzy,
    "normalized": compare_normalized,
    "contains": compare_contains,
    "enum": compare_enum,
}


def compare_field(
    field_name: str,
    expected: str,
    extracted: Optional[str],
    match_type: Optional[MatchType] = None,
) -> ComparisonResult:
    """Compare an expected (application) value against the value read off the label.

    A missing or blank extracted value is always not_found with
    confidence 0, whatever the strategy.
    """
    if extracted is None or not extracted.strip():
        return ComparisonResult(
            status="not_found",
            confidence=0,
            reasoning=f'Field "{field_name}" was not found on the label.',
        )

    strategy = match_type or FIELD_MATCH_STRATEGY.get(field_name, "fuzzy")
    comparator = STRATEGIES.get(strategy, compare_fuzzy)
    return comparator(field_name, expected, extracted)
