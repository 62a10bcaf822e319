"""Numeric readings of alcohol content, net contents and age statements.

Each function returns None when no number can be read, which the
comparator treats as "fall back to fuzzy text comparison".
"""

import re

from labelcheck.reference.units import UNIT_TO_ML
from labelcheck.utils.text_normalization import normalize_whitespace, round_half_up

_PROOF_RE = re.compile(r"(\d+(?:\.\d+)?)\s*proof", re.IGNORECASE)
_PERCENT_RE = re.compile(r"(\d+(?:\.\d+)?)\s*%")
_QUANTITY_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(.+)")
_THOUSANDS_RE = re.compile(r"(?<=\d),(?=\d{3}(?!\d))")
_AGE_YEARS_RE = re.compile(r"(\d+)\s*(?:years?|yrs?)\b", re.IGNORECASE)
_AGED_RE = re.compile(r"aged\s+(\d+)", re.IGNORECASE)


def normalize_alcohol_content(value: str) -> float | None:
    """ABV percentage from "45% Alc./Vol.", "12.5% ABV", "90 Proof" (-> 45.0) and the like.

    Proof is read first: US proof is exactly twice the ABV.
    """
    cleaned = normalize_whitespace(value)

    proof = _PROOF_RE.search(cleaned)
    if proof:
        return float(proof.group(1)) / 2

    pct = _PERCENT_RE.search(cleaned)
    if pct:
        return float(pct.group(1))

    return None


def _unit_multiplier(unit_text: str) -> float | None:
    unit = unit_text.lower().rstrip(".").strip()
    if unit in UNIT_TO_ML:
        return UNIT_TO_ML[unit]

    # Units followed by other words ("750 mL (25.4 FL OZ)"). The earliest
    # unit wins, and the longest one at that position, so "fl oz" is not read as "oz".
    found = []
    for name, ml in UNIT_TO_ML.items():
        match = re.search(rf"(?<![a-z]){re.escape(name)}(?![a-z])", unit)
        if match:
            found.append((match.start(), -len(name), ml))
    return min(found)[2] if found else None


def normalize_net_contents(value: str) -> float | None:
    """Net contents in milliliters: "750 mL", "75cL", "1.5 L", "25.4 FL OZ", "1 Liter"."""
    cleaned = _THOUSANDS_RE.sub("", normalize_whitespace(value))

    match = _QUANTITY_RE.search(cleaned)
    if not match:
        return None

    multiplier = _unit_multiplier(match.group(2))
    if multiplier is None:
        return None

    return round_half_up(float(match.group(1)) * multiplier * 100) / 100


def normalize_age_statement(value: str) -> int | None:
    """Whole years from "12 Years Old", "Aged 4 Years", "Aged 10"."""
    cleaned = normalize_whitespace(value)

    years = _AGE_YEARS_RE.search(cleaned)
    if years:
        return int(years.group(1))

    aged = _AGED_RE.search(cleaned)
    if aged:
        return int(aged.group(1))

    return None
