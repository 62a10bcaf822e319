"""Span matching — line extracted field values back up with OCR tokens.

Pure CPU, no model calls. A typical label has ~150 words, so the
quadratic-looking scan below is bounded by MAX_SPAN_TOKENS per start
position and finishes in well under a millisecond.
"""

import logging
import re
from collections import Counter
from typing import Optional

from labelcheck.models.schemas import (
    ExtractedField,
    IndexedWord,
    NormalizedBox,
    OcrResult,
    RuleClassifiedField,
)
from labelcheck.utils.geometry import compute_normalized_bounding_box
from labelcheck.utils.text_normalization import normalize_for_matching

logger = logging.getLogger(__name__)

# Longest run of tokens considered for one span.
MAX_SPAN_TOKENS = 60

# A partial span must cover at least this share of the normalized target.
MIN_COVERAGE_RATIO = 0.6

# Stop growing a span once it is longer than target * factor + slack characters.
SPAN_LENGTH_FACTOR = 1.5
SPAN_LENGTH_SLACK = 20

# Values longer than this (normalized) fall back to their opening words when the whole value misses.
LONG_VALUE_THRESHOLD = 80
LONG_VALUE_PREFIX_WORDS = 8

_NUMBER_TAIL_RE = re.compile(r"\d\.?$")
_NUMBER_HEAD_RE = re.compile(r"^[\d.%]")


def _append_token(accumulated: str, token: str) -> str:
    """Append a token, gluing numeric fragments back together.

    OCR splits "12.5%" into "12." + "5%", "12" + "." + "5%", "12.5" + "%"
    or even "12" + "." + "5" + "%". The check looks at the end of the
    accumulated text, not the previous token, because earlier joins may
    already have merged fragments.
    """
    if not accumulated:
        return token
    if _NUMBER_TAIL_RE.search(accumulated) and _NUMBER_HEAD_RE.match(token):
        return accumulated + token
    return f"{accumulated} {token}"


def find_matching_words(value: str, words: list[IndexedWord]) -> list[IndexedWord]:
    """Find the consecutive run of OCR words that best matches `value`.

    For every start word, the window grows one token at a time:
      - normalized window == target: returned immediately
      - window is a substring of the target: kept as a candidate scored by
        coverage (window length / target length)
      - window contains the target: full-containment match, stop growing

    The best candidate is returned only when its coverage reaches
    MIN_COVERAGE_RATIO; otherwise the result is empty.
    """
    target = normalize_for_matching(value)
    if not target:
        return []

    max_length = len(target) * SPAN_LENGTH_FACTOR + SPAN_LENGTH_SLACK
    best_match: list[IndexedWord] = []
    best_score = 0.0

    for start, first in enumerate(words):
        # Punctuation-only tokens ("." "," ":") would drag in stray coordinates
        if not normalize_for_matching(first.text):
            continue

        accumulated = ""
        for end in range(start, min(len(words), start + MAX_SPAN_TOKENS)):
            accumulated = _append_token(accumulated, words[end].text)
            window = normalize_for_matching(accumulated)

            if window == target:
                return words[start:end + 1]

            if window in target:
                score = len(window) / len(target)
                if score > best_score:
                    best_score = score
                    best_match = words[start:end + 1]
            elif target in window:
                if best_score < 1.0:
                    best_score = 1.0
                    best_match = words[start:end + 1]
                break

            if len(window) > max_length:
                break

    return best_match if best_score >= MIN_COVERAGE_RATIO else []


def find_matching_span(value: str, words: list[IndexedWord]) -> list[IndexedWord]:
    """find_matching_words, plus a prefix fallback for long values.

    Long regulatory text (the health warning) rarely survives OCR intact,
    but its opening words usually do. Only values longer than
    LONG_VALUE_THRESHOLD normalized characters get the fallback.
    """
    matched = find_matching_words(value, words)
    if matched or len(normalize_for_matching(value)) <= LONG_VALUE_THRESHOLD:
        return matched

    prefix = " ".join(value.split()[:LONG_VALUE_PREFIX_WORDS])
    matched = find_matching_words(prefix, words)
    if matched:
        logger.debug(f"Long value located by its first {LONG_VALUE_PREFIX_WORDS} words: {prefix!r}")
    return matched


def resolve_bounding_box(
    matched: list[IndexedWord],
    ocr_results: list[OcrResult],
) -> tuple[Optional[NormalizedBox], int]:
    """Box around matched words on the image holding most of them.

    Returns (box, image_index). Ties between images go to the image
    seen first. Tokens that normalize to nothing (stray "/", "(", ")")
    are left out: their coordinates are unreliable on curved bottles.
    """
    if not matched:
        return None, 0

    image_index = Counter(w.image_index for w in matched).most_common(1)[0][0]
    if image_index >= len(ocr_results):
        return None, image_index

    words_on_image = [
        w.word for w in matched
        if w.image_index == image_index and normalize_for_matching(w.text)
    ]
    result = ocr_results[image_index]
    box = compute_normalized_bounding_box(words_on_image, result.image_width, result.image_height)
    return box, image_index


def locate_fields(
    fields: list[RuleClassifiedField],
    words: list[IndexedWord],
    ocr_results: list[OcrResult],
) -> list[ExtractedField]:
    """Attach bounding boxes to classified fields.

    Fields that already reference word indices are resolved through them;
    the rest are located by matching their value against the OCR words.
    Fields without a value or without a match keep bounding_box=None.
    """
    by_index = {w.global_index: w for w in words}
    located = []

    for field in fields:
        if field.word_indices:
            matched = [by_index[i] for i in field.word_indices if i in by_index]
        elif field.value:
            matched = find_matching_span(field.value, words)
        else:
            matched = []

        box, image_index = resolve_bounding_box(matched, ocr_results)
        located.append(ExtractedField(
            field_name=field.field_name,
            value=field.value,
            confidence=field.confidence,
            reasoning=field.reasoning,
            bounding_box=box,
            image_index=image_index,
        ))

    return located
