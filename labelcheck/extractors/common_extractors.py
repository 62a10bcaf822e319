"""Per-field extractors used when no application data is available.

Each extractor reads the combined OCR text and returns a
RuleClassifiedField: the value it found (or None), a confidence and a
reasoning string. Extractors never raise for missing fields.
"""

import re

from labelcheck.models.schemas import RuleClassifiedField
from labelcheck.reference.appellations import APPELLATIONS
from labelcheck.reference.class_type_codes import COMMON_CLASS_TYPES, codes_for_beverage_type
from labelcheck.reference.grape_varietals import GRAPE_VARIETALS
from labelcheck.reference.qualifying_phrases import phrases_longest_first
from labelcheck.rules.text_search_rules import best_fuzzy_window, normalize_for_search
from labelcheck.utils.text_normalization import (
    find_longest_term,
    normalize_ampersand,
    normalize_whitespace,
    percent,
)

# Characters kept after "GOVERNMENT WARNING" when the numbered sections are incomplete.
HEALTH_WARNING_WINDOW = 500
# Characters kept after "(2)" when no sentence end follows it.
HEALTH_WARNING_SECTION_2_WINDOW = 200
# Qualifying phrases read with OCR typos ("BOTILED") need this window similarity.
QUALIFYING_PHRASE_FUZZY_THRESHOLD = 0.8
# Longest name-and-address text taken after a qualifying phrase.
NAME_AND_ADDRESS_WINDOW = 200

_NUMBER = r"(\d{1,3}(?:,\d{3})+|\d+(?:\.\d+)?)"

ALCOHOL_CONTENT_PATTERNS = [
    re.compile(r"(\d+(?:\.\d+)?)\s*%\s*alc\.?\s*/\s*vol\.?", re.IGNORECASE),
    re.compile(r"(\d+(?:\.\d+)?)\s*%\s*alcohol\s+by\s+volume", re.IGNORECASE),
    re.compile(r"(\d+(?:\.\d+)?)\s*%\s*alc\b", re.IGNORECASE),
    re.compile(r"(\d+(?:\.\d+)?)\s*proof", re.IGNORECASE),
    re.compile(r"(\d+(?:\.\d+)?)\s*%\s*abv", re.IGNORECASE),
]

NET_CONTENTS_PATTERNS = [
    re.compile(_NUMBER + r"\s*ml\b", re.IGNORECASE),
    re.compile(_NUMBER + r"\s*cl\b", re.IGNORECASE),
    re.compile(_NUMBER + r"\s*(?:fl\.?\s*)?oz\.?", re.IGNORECASE),
    re.compile(_NUMBER + r"\s*(?:liters?|litres?|l)\b", re.IGNORECASE),
    re.compile(_NUMBER + r"\s*(?:gallons?|gal)\b", re.IGNORECASE),
    re.compile(_NUMBER + r"\s*(?:quarts?|qt)\b", re.IGNORECASE),
    re.compile(_NUMBER + r"\s*(?:pints?|pt)\b", re.IGNORECASE),
]

AGE_STATEMENT_PATTERNS = [
    re.compile(r"aged\s+(?:a\s+minimum\s+of\s+)?(\d+)\s*years?", re.IGNORECASE),
    re.compile(r"(\d+)\s*years?\s*old", re.IGNORECASE),
    re.compile(r"(\d+)\s*yr\s*old", re.IGNORECASE),
    re.compile(r"(\d+)\s*-\s*year", re.IGNORECASE),
]

# (pattern, prefix used in the returned value)
COUNTRY_OF_ORIGIN_PATTERNS = [
    (re.compile(r"product\s+of\s+(\w[\w ]*\w|\w)", re.IGNORECASE), "Product of"),
    (re.compile(r"imported\s+from\s+(\w[\w ]*\w|\w)", re.IGNORECASE), "Imported from"),
    (re.compile(r"made\s+in\s+(\w[\w ]*\w|\w)", re.IGNORECASE), "Made in"),
    (re.compile(r"produced\s+in\s+(\w[\w ]*\w|\w)", re.IGNORECASE), "Produced in"),
]
# Words that end a country name ("Product of France and bottled by ...").
_COUNTRY_STOP_RE = re.compile(r"\b(?:as|and|by|from|for|is|was|that|which|where)\b", re.IGNORECASE)
_COUNTRY_MAX_WORDS = 3

STATE_OF_DISTILLATION_PATTERNS = [
    re.compile(r"distilled\s+in\s+\w+(?:[ \t]+\w+){0,2}", re.IGNORECASE),
    re.compile(r"\b[A-Z][A-Za-z]+\s+(?i:straight)\b"),
]

_YEAR_RE = re.compile(r"\b(19\d{2}|20[0-2]\d|2030)\b")
_NAME_ADDRESS_END_RE = re.compile(r"[.\n]|government warning|contains sulfites|\d+%\s*alc", re.IGNORECASE)
_CITY_STATE_RE = re.compile(r"[A-Z][\w .']+,[ \t]*[A-Z]{2}\b")


def make_field(field_name: str, value: str | None, confidence: float, reasoning: str) -> RuleClassifiedField:
    return RuleClassifiedField(
        field_name=field_name,
        value=value,
        confidence=confidence,
        word_indices=[],
        reasoning=reasoning,
    )


def _first_pattern_match(patterns, ocr_text: str) -> str | None:
    for pattern in patterns:
        match = pattern.search(ocr_text)
        if match:
            return match.group(0).strip()
    return None


def extract_health_warning(ocr_text: str) -> RuleClassifiedField:
    """Locate the government warning statement.

    Steps:
      1. Find "GOVERNMENT WARNING" (any case)
      2. If both "(1)" and "(2)" follow it, capture through the end of
         the sentence after "(2)" (confidence 85)
      3. Otherwise keep a fixed window after the prefix (confidence 60)
    """
    lower = ocr_text.lower()
    start = lower.find("government warning")
    if start == -1:
        return make_field("health_warning", None, 0, "GOVERNMENT WARNING prefix not found.")

    section_1 = lower.find("(1)", start)
    section_2 = lower.find("(2)", start)
    if section_1 != -1 and section_2 != -1:
        end_match = re.search(r"\.(?:\s|$)", ocr_text[section_2:])
        if end_match:
            end = section_2 + end_match.start() + 1
        else:
            end = min(len(ocr_text), section_2 + HEALTH_WARNING_SECTION_2_WINDOW)
        value = normalize_whitespace(ocr_text[start:end])
        return make_field("health_warning", value, 85, "Found GOVERNMENT WARNING with both sections.")

    value = normalize_whitespace(ocr_text[start:start + HEALTH_WARNING_WINDOW])
    return make_field("health_warning", value, 60, "Found GOVERNMENT WARNING but may be incomplete.")


def extract_qualifying_phrase(ocr_text: str) -> RuleClassifiedField:
    """Longest known phrase first, so "Produced and Bottled by" beats "Bottled by".

    "&" on the label reads as "and". When no phrase appears literally, a
    fuzzy window search catches OCR typos and truncation ("DUCED").
    """
    normalized = normalize_ampersand(ocr_text)
    phrase = find_longest_term(normalized, phrases_longest_first())
    if phrase:
        return make_field("qualifying_phrase", phrase, 95, f'Found qualifying phrase: "{phrase}".')

    searchable = normalize_for_search(normalized)
    for phrase in phrases_longest_first():
        similarity = best_fuzzy_window(searchable, phrase.lower())
        if similarity >= QUALIFYING_PHRASE_FUZZY_THRESHOLD:
            return make_field(
                "qualifying_phrase",
                phrase,
                percent(similarity),
                f'Fuzzy matched qualifying phrase: "{phrase}" ({percent(similarity)}% similarity).',
            )

    return make_field("qualifying_phrase", None, 0, "No known qualifying phrase found.")


def extract_sulfite_declaration(ocr_text: str) -> RuleClassifiedField:
    lower = normalize_whitespace(ocr_text).lower()
    if "contains sulfites" in lower:
        return make_field("sulfite_declaration", "Contains Sulfites", 95, 'Found "Contains Sulfites" declaration.')
    if "contains sulphites" in lower:
        return make_field(
            "sulfite_declaration", "Contains Sulfites", 90, 'Found "Contains Sulphites" (alternate spelling).'
        )
    return make_field("sulfite_declaration", None, 0, "No sulfite declaration found.")


def extract_alcohol_content(ocr_text: str) -> RuleClassifiedField:
    """Handles "45% Alc./Vol.", "12.5% Alc/Vol", "40% alcohol by volume", "80 Proof", "5.0% ABV"."""
    value = _first_pattern_match(ALCOHOL_CONTENT_PATTERNS, ocr_text)
    if value:
        return make_field("alcohol_content", value, 90, "Matched alcohol content pattern.")
    return make_field("alcohol_content", None, 0, "No alcohol content pattern found.")


def extract_net_contents(ocr_text: str) -> RuleClassifiedField:
    """Extract a net contents statement.

    Handles:
      - "750 mL", "750ml", "1,750 mL"
      - "75 cL"
      - "12 FL OZ", "12 FL. OZ.", "12 oz"
      - "1 L", "1.5 liters"
      - "1 GAL", "1 QT", "1 PINT"
    """
    value = _first_pattern_match(NET_CONTENTS_PATTERNS, ocr_text)
    if value:
        return make_field("net_contents", value, 90, "Matched net contents pattern.")
    return make_field("net_contents", None, 0, "No net contents pattern found.")


def extract_vintage_year(ocr_text: str) -> RuleClassifiedField:
    match = _YEAR_RE.search(ocr_text)
    if match:
        return make_field("vintage_year", match.group(1), 80, f"Found year: {match.group(1)}.")
    return make_field("vintage_year", None, 0, "No vintage year found.")


def extract_age_statement(ocr_text: str) -> RuleClassifiedField:
    value = _first_pattern_match(AGE_STATEMENT_PATTERNS, ocr_text)
    if value:
        return make_field("age_statement", value, 90, "Matched age statement pattern.")
    return make_field("age_statement", None, 0, "No age statement found.")


def extract_country_of_origin(ocr_text: str) -> RuleClassifiedField:
    """"Product of France", "Imported from Scotland", "Made in Mexico"."""
    for pattern, prefix in COUNTRY_OF_ORIGIN_PATTERNS:
        match = pattern.search(ocr_text)
        if not match:
            continue

        raw = match.group(1).strip()
        stop = _COUNTRY_STOP_RE.search(raw)
        if stop:
            country = raw[:stop.start()].strip()
        else:
            country = " ".join(raw.split()[:_COUNTRY_MAX_WORDS])
        if not country:
            continue
        return make_field("country_of_origin", f"{prefix} {country}", 85, "Matched country of origin pattern.")

    return make_field("country_of_origin", None, 0, "No country of origin found.")


def extract_class_type(ocr_text: str, beverage_type: str | None = None) -> RuleClassifiedField:
    """Class/type designation from the TTB code table, then common label wording.

    Codes are limited to the beverage type when it is known, and the
    longest description wins ("Straight Bourbon Whisky" over "Bourbon Whisky").
    """
    codes = {code.description: code for code in codes_for_beverage_type(beverage_type)}
    description = find_longest_term(ocr_text, codes)
    if description:
        code = codes[description]
        return make_field(
            "class_type", description, 85, f'Matched class/type code: "{description}" ({code.code}).'
        )

    common = find_longest_term(ocr_text, COMMON_CLASS_TYPES)
    if common:
        return make_field("class_type", common, 80, f'Found class/type in text: "{common}".')

    return make_field("class_type", None, 0, "No class/type designation found.")


def extract_grape_varietal(ocr_text: str) -> RuleClassifiedField:
    varietal = find_longest_term(ocr_text, GRAPE_VARIETALS)
    if varietal:
        return make_field("grape_varietal", varietal, 90, f'Found grape varietal: "{varietal}".')
    return make_field("grape_varietal", None, 0, "No known grape varietal found.")


def extract_appellation(ocr_text: str) -> RuleClassifiedField:
    appellation = find_longest_term(ocr_text, APPELLATIONS)
    if appellation:
        return make_field("appellation_of_origin", appellation, 85, f'Found appellation: "{appellation}".')
    return make_field("appellation_of_origin", None, 0, "No known appellation found.")


def _phrase_pattern(phrase: str) -> re.Pattern:
    """Regex for a qualifying phrase that tolerates "&" for "and" and any whitespace."""
    parts = [r"(?:and|&)" if word.lower() == "and" else re.escape(word) for word in phrase.split()]
    return re.compile(r"(?<!\w)" + r"\s+".join(parts) + r"(?!\w)", re.IGNORECASE)


def extract_name_and_address(ocr_text: str) -> RuleClassifiedField:
    """Producer name and address: the text after a qualifying phrase.

    Falls back to the first "City, ST" looking line.
    """
    for phrase in phrases_longest_first():
        match = _phrase_pattern(phrase).search(ocr_text)
        if not match:
            continue

        after = ocr_text[match.end():].strip()
        end_match = _NAME_ADDRESS_END_RE.search(after)
        end = end_match.start() if end_match else min(len(after), NAME_AND_ADDRESS_WINDOW)
        name_address = normalize_whitespace(after[:end]).lstrip(",: ")

        if len(name_address) > 3:
            return make_field("name_and_address", name_address, 75, f'Found name and address after "{phrase}".')

    city_state = _CITY_STATE_RE.search(ocr_text)
    if city_state:
        return make_field("name_and_address", city_state.group(0).strip(), 60, "Found City, ST pattern.")

    return make_field("name_and_address", None, 0, "No name and address found.")


def extract_state_of_distillation(ocr_text: str) -> RuleClassifiedField:
    """"Distilled in Kentucky", "Kentucky Straight Bourbon"."""
    value = _first_pattern_match(STATE_OF_DISTILLATION_PATTERNS, ocr_text)
    if value:
        return make_field("state_of_distillation", value, 80, "Matched state of distillation pattern.")
    return make_field("state_of_distillation", None, 0, "No state of distillation found.")
