"""Brand and fanciful name extraction by elimination.

Brand names are arbitrary proper nouns, so no pattern can find them.
Instead, everything the field extractors already recognized is removed
from the OCR text, together with regulatory boilerplate, and the
remaining lines are scored on how much they look like a brand name.

Steps:
  1. Strip claimed values (Pass 1 output, plus anything in `exclude`)
  2. Strip boilerplate (warning text, image separators, sulfite notice)
  3. Split into lines and score each one
  4. Best line wins, unless its score is negative
"""

import logging
import re
from typing import NamedTuple

from labelcheck.extractors.common_extractors import make_field
from labelcheck.models.schemas import RuleClassifiedField
from labelcheck.utils.text_normalization import normalize_whitespace

logger = logging.getLogger(__name__)

BRAND_NAME_CONFIDENCE = 70
FANCIFUL_NAME_CONFIDENCE = 60

NOISE_PATTERNS = [
    re.compile(r"^\d+$"),
    re.compile(r"^[a-z]$", re.IGNORECASE),
    re.compile(r"^---"),
    re.compile(r"^image\s+\d", re.IGNORECASE),
    re.compile(r"^\(?\d\)"),
    re.compile(r"^[^\w]+$"),
]

NOISE_WORDS = {
    "the", "of", "and", "or", "a", "an", "in", "by", "for", "to", "from",
    "with", "vol", "alc", "proof", "ml", "cl", "oz", "fl", "liter", "litre",
}

BOILERPLATE_PATTERNS = [
    re.compile(r"government\s+warning[:\s][\s\S]*?(?:health\s+problems|$)", re.IGNORECASE),
    re.compile(r"---\s*image\s+\d+\s*---", re.IGNORECASE),
    re.compile(r"contains?\s+sulfites?", re.IGNORECASE),
    re.compile(r"according\s+to\s+the\s+surgeon\s+general", re.IGNORECASE),
]

_ADDRESS_RE = re.compile(r",\s*[A-Z]{2}\b")


class EliminationCandidate(NamedTuple):
    line: str
    score: int


def strip_claimed_values(text: str, claimed_values) -> str:
    """Remove every claimed value from the text, case-insensitively.

    Claimed values are whitespace-normalized while the OCR text still
    has its line breaks, so any run of whitespace matches a space.
    """
    for value in claimed_values:
        if not value or len(value) < 2:
            continue
        pattern = r"\s+".join(re.escape(part) for part in value.split())
        text = re.sub(pattern, "", text, flags=re.IGNORECASE)
    return text


def strip_boilerplate(text: str) -> str:
    for pattern in BOILERPLATE_PATTERNS:
        text = pattern.sub("", text)
    return text


def score_candidate(line: str, line_index: int) -> int:
    """Score a line for brand name likelihood. Noise lines score -1."""
    trimmed = line.strip()
    if not trimmed:
        return -1
    if any(pattern.search(trimmed) for pattern in NOISE_PATTERNS):
        return -1

    words = trimmed.split()
    if all(word.lower() in NOISE_WORDS for word in words):
        return -1

    # Brand names sit near the top of the label
    score = max(0, 10 - line_index * 2)

    if len(words) <= 4:
        score += 5
    elif len(words) <= 6:
        score += 2
    else:
        score -= 3

    if trimmed == trimmed.upper() and re.search(r"[A-Z]", trimmed):
        score += 3
    elif all(word[0].isupper() for word in words if word[0].isalpha()):
        score += 1

    if _ADDRESS_RE.search(trimmed):
        score -= 5

    return score


def extract_by_elimination(ocr_text: str, claimed_values, exclude=()) -> EliminationCandidate | None:
    """Best unclaimed line in the OCR text, or None if nothing scores >= 0."""
    cleaned = strip_boilerplate(strip_claimed_values(ocr_text, [*claimed_values, *exclude]))
    lines = [normalize_whitespace(line) for line in cleaned.split("\n")]
    lines = [line for line in lines if line]

    best = None
    for index, line in enumerate(lines):
        score = score_candidate(line, index)
        if best is None or score > best.score:
            best = EliminationCandidate(line, score)

    if best is None or best.score < 0:
        return None
    return best


def extract_brand_name(ocr_text: str, claimed_values) -> RuleClassifiedField:
    candidate = extract_by_elimination(ocr_text, claimed_values)
    if candidate is None:
        return make_field("brand_name", None, 0, "No viable brand name candidate found.")

    logger.debug(f"Brand name by elimination: {candidate.line!r} (score {candidate.score})")
    return make_field(
        "brand_name", candidate.line, BRAND_NAME_CONFIDENCE, f"Extracted by exclusion (score: {candidate.score})."
    )


def extract_fanciful_name(ocr_text: str, claimed_values, brand_name: str | None = None) -> RuleClassifiedField:
    """Same scoring as the brand name, with the brand itself excluded."""
    exclude = [brand_name] if brand_name else []
    candidate = extract_by_elimination(ocr_text, claimed_values, exclude=exclude)
    if candidate is None:
        return make_field("fanciful_name", None, 0, "No viable fanciful name candidate found.")

    return make_field(
        "fanciful_name",
        candidate.line,
        FANCIFUL_NAME_CONFIDENCE,
        f"Extracted by exclusion (score: {candidate.score}).",
    )
