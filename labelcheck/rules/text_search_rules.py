"""Text search rules — find where an expected value appears in the OCR text.

Each rule function takes a SearchContext and returns:
  - None if the rule does not find the value
  - A SearchHit (confidence, reasoning) if it does

Rules go from strict to forgiving. The cascade in rule_registry tries
them in order and the first hit wins, so a rule only has to handle the
OCR damage the earlier rules could not.
"""

import math
import re
from typing import NamedTuple

from labelcheck.utils.text_normalization import (
    fuzzy_match,
    normalize_ampersand,
    normalize_whitespace,
    percent,
    round_half_up,
    strip_sentence_punctuation,
)

# Best sliding-window similarity that still counts as a fuzzy hit.
FUZZY_WINDOW_THRESHOLD = 0.7

# Token overlap only applies to values with at least this many significant tokens...
MIN_SIGNIFICANT_TOKENS = 3
# ...where a significant token has at least this many characters without punctuation.
MIN_TOKEN_LENGTH = 3
# Share of significant tokens that must be found somewhere in the text.
TOKEN_OVERLAP_THRESHOLD = 0.75

_ALL_PUNCTUATION_RE = re.compile(r"""[.,;:!?()\[\]{}'"]""")


class SearchHit(NamedTuple):
    confidence: float
    reasoning: str


def normalize_for_search(text: str) -> str:
    """Whitespace collapsed and lowercased; punctuation is left alone."""
    return normalize_whitespace(text).lower()


def _strip_all_punctuation(text: str) -> str:
    return _ALL_PUNCTUATION_RE.sub("", text)


class SearchContext:
    """OCR text and one expected value, pre-normalized for every rule.

    Attributes:
        ocr: Normalized OCR text (whitespace collapsed, lowercased).
        ocr_amp: Same, with "&" read as "and".
        expected: Normalized expected value.
        expected_amp: Same, with "&" read as "and".
    """

    def __init__(self, ocr_text: str, expected_value: str):
        self.ocr_text = ocr_text
        self.expected_value = expected_value
        self.ocr = normalize_for_search(ocr_text)
        self.ocr_amp = normalize_for_search(normalize_ampersand(ocr_text))
        self.expected = normalize_for_search(expected_value)
        self.expected_amp = normalize_for_search(normalize_ampersand(expected_value))


def fuzzy_window_sizes(target_word_count: int) -> set[int]:
    """Window sizes tried by best_fuzzy_window for an n-word target.

    The exact-length window catches typos inside words ("BOTILED"), the
    padded one catches inserted junk ("DISTILLED B & BOTTLED BY").
    """
    padding = max(2, math.ceil(target_word_count * 0.2))
    return {max(target_word_count, 3), max(target_word_count + padding, 5)}


def best_fuzzy_window(text: str, target: str) -> float:
    """Highest bigram similarity between `target` and any run of words in `text`."""
    words = text.split(" ")
    best = 0.0

    for size in sorted(fuzzy_window_sizes(len(target.split(" ")))):
        for start in range(len(words) - min(size, len(words)) + 1):
            window = " ".join(words[start:start + size])
            _, similarity = fuzzy_match(window, target)
            if similarity > best:
                best = similarity
    return best


def exact_substring(ctx: SearchContext) -> SearchHit | None:
    if ctx.expected in ctx.ocr:
        return SearchHit(95, "Found exact match in OCR text.")
    return None


def ampersand_substring(ctx: SearchContext) -> SearchHit | None:
    """"Produced & Bottled by" on the label vs "Produced and Bottled by" in the application."""
    if ctx.expected_amp in ctx.ocr_amp:
        return SearchHit(93, 'Found match after normalizing "&" to "and".')
    return None


def collapsed_space_substring(ctx: SearchContext) -> SearchHit | None:
    """"750mL" vs "750 mL"."""
    if ctx.expected.replace(" ", "") in ctx.ocr.replace(" ", ""):
        return SearchHit(90, "Found match after collapsing spaces.")
    return None


def punctuation_stripped_substring(ctx: SearchContext) -> SearchHit | None:
    """"Vol." vs "Vol", "OZ." vs "OZ"."""
    if strip_sentence_punctuation(ctx.expected) in strip_sentence_punctuation(ctx.ocr):
        return SearchHit(88, "Found match after stripping punctuation.")
    return None


def punctuation_stripped_collapsed_substring(ctx: SearchContext) -> SearchHit | None:
    expected = strip_sentence_punctuation(ctx.expected).replace(" ", "")
    ocr = strip_sentence_punctuation(ctx.ocr).replace(" ", "")
    if expected in ocr:
        return SearchHit(85, "Found match after stripping punctuation and collapsing spaces.")
    return None


def fuzzy_window(ctx: SearchContext) -> SearchHit | None:
    similarity = best_fuzzy_window(ctx.ocr, ctx.expected)
    if similarity >= FUZZY_WINDOW_THRESHOLD:
        return SearchHit(percent(similarity), f"Fuzzy match with {percent(similarity)}% similarity.")
    return None


def fuzzy_window_ampersand(ctx: SearchContext) -> SearchHit | None:
    similarity = best_fuzzy_window(ctx.ocr_amp, ctx.expected_amp)
    if similarity >= FUZZY_WINDOW_THRESHOLD:
        return SearchHit(
            percent(similarity),
            f"Fuzzy match (ampersand-normalized) with {percent(similarity)}% similarity.",
        )
    return None


def token_overlap(ctx: SearchContext) -> SearchHit | None:
    """Expected words scattered across the text.

    OCR often breaks a value like "37.5% Alc. By Vol. (75 Proof)" over
    several lines. Only values with MIN_SIGNIFICANT_TOKENS or more
    significant tokens qualify; shorter ones would match too easily.
    """
    tokens = [
        token for token in ctx.expected.split(" ")
        if len(_strip_all_punctuation(token)) >= MIN_TOKEN_LENGTH
    ]
    if len(tokens) < MIN_SIGNIFICANT_TOKENS:
        return None

    ocr_no_punctuation = _strip_all_punctuation(ctx.ocr)
    found = sum(
        1 for token in tokens
        if token in ctx.ocr or _strip_all_punctuation(token) in ocr_no_punctuation
    )
    ratio = found / len(tokens)
    if ratio >= TOKEN_OVERLAP_THRESHOLD:
        return SearchHit(
            round_half_up(ratio * 85),
            f"Token overlap: {found}/{len(tokens)} significant tokens found ({percent(ratio)}%).",
        )
    return None
