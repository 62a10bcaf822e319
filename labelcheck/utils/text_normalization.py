import math
import re

# Bigram (Dice) similarity at or above this is treated as the same text.
FUZZY_MATCH_THRESHOLD = 0.8

_WHITESPACE_RE = re.compile(r"\s+")
# A period that is not sitting between two digits ("12.5" keeps its point).
_NON_DECIMAL_PERIOD_RE = re.compile(r"(?<!\d)\.|\.(?!\d)")
# Anything that is not a word character, whitespace or a (decimal) period,
# plus the underscore that \w lets through.
_PUNCTUATION_RE = re.compile(r"[^\w\s.]|_")
_SENTENCE_PUNCTUATION_RE = re.compile(r"[.,;:!?]")


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_ampersand(text: str) -> str:
    """Read "&" as "and" so "Produced & Bottled by" finds "produced and bottled by"."""
    return text.replace("&", "and")


def strip_sentence_punctuation(text: str) -> str:
    return _SENTENCE_PUNCTUATION_RE.sub("", text)


def normalize_for_matching(text: str) -> str:
    """Normalization used when lining OCR tokens up against a field value.

    Steps:
      1. Lowercase everything
      2. Drop periods, except a period between two digits (decimal point),
         so "12.5%" keeps its value when OCR splits it into "12." + "5%"
      3. Replace all other punctuation (including "/", "&", "%", "_", quotes)
         with a space, so "ALC/VOL" lines up with tokens "ALC" "/" "VOL"
      4. Collapse whitespace and trim

    The result only contains letters, digits, single spaces and decimal
    points, so applying it twice changes nothing.
    """
    text = text.lower()
    text = _NON_DECIMAL_PERIOD_RE.sub("", text)
    text = _PUNCTUATION_RE.sub(" ", text)
    return normalize_whitespace(text)


def _bigrams(text: str) -> set[str]:
    lower = text.lower()
    return {lower[i:i + 2] for i in range(len(lower) - 1)}


def bigram_similarity(a: str, b: str) -> float:
    """Dice coefficient over the sets of character bigrams, case-insensitive.

    Strings shorter than two characters have no bigrams; they score 1.0
    only when equal.
    """
    norm_a = normalize_whitespace(a)
    norm_b = normalize_whitespace(b)

    if norm_a.lower() == norm_b.lower():
        return 1.0

    if len(norm_a) < 2 or len(norm_b) < 2:
        return 0.0

    bigrams_a = _bigrams(norm_a)
    bigrams_b = _bigrams(norm_b)
    intersection = len(bigrams_a & bigrams_b)
    return (2 * intersection) / (len(bigrams_a) + len(bigrams_b))


def fuzzy_match(a: str, b: str) -> tuple[bool, float]:
    """Return (is_match, similarity) using bigram similarity."""
    similarity = bigram_similarity(a, b)
    return similarity >= FUZZY_MATCH_THRESHOLD, similarity


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive scores (Python's round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


def percent(ratio: float) -> int:
    """Turn a 0-1 ratio into a whole percentage."""
    return round_half_up(ratio * 100)


def find_longest_term(text: str, terms) -> str | None:
    """Return the longest dictionary term appearing in `text` as whole words.

    Longest first, so "Cabernet Sauvignon" wins over "Sauvignon" and
    "Straight Bourbon Whisky" over "Bourbon Whisky". Case-insensitive;
    returns the term in its dictionary spelling.
    """
    lower = text.lower()
    for term in sorted(terms, key=len, reverse=True):
        if re.search(rf"(?<!\w){re.escape(term.lower())}(?!\w)", lower):
            return term
    return None
