"""Calorie and protein hints mined from free-text dish descriptions."""

import math
import re

_KCAL_RANGE = re.compile(r"(\d{2,4})\s*[–-]\s*(\d{2,4})\s*kcal", re.IGNORECASE)
_KCAL_SINGLE = re.compile(r"(\d{2,4})\s*kcal", re.IGNORECASE)
_PROTEIN_RANGE = re.compile(
    r"(\d{1,3})\s*[–-]\s*(\d{1,3})\s*g\s*protein", re.IGNORECASE
)
_PROTEIN_SINGLE = re.compile(r"(\d{1,3})\s*g\s*protein", re.IGNORECASE)


def extract_macros(
    text: str | None, fallback_calories: float, fallback_protein: float
) -> tuple[float, float]:
    """Return (calories, protein) estimated from ``text``.

    A range such as "550-650 kcal" wins over a single value and resolves to
    its mean, rounded to the nearest integer. When no hint is found the
    fallbacks are returned unchanged.
    """
    if not isinstance(text, str):
        return fallback_calories, fallback_protein
    calories = _extract_value(text, _KCAL_RANGE, _KCAL_SINGLE, fallback_calories)
    protein = _extract_value(
        text, _PROTEIN_RANGE, _PROTEIN_SINGLE, fallback_protein
    )
    return calories, protein


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def _extract_value(
    text: str,
    range_pattern: re.Pattern[str],
    single_pattern: re.Pattern[str],
    fallback: float,
) -> float:
    range_match = range_pattern.search(text)
    if range_match:
        low = _to_number(range_match.group(1))
        high = _to_number(range_match.group(2))
        if low is not None and high is not None:
            return round_half_up((low + high) / 2)
        return fallback
    single_match = single_pattern.search(text)
    if single_match:
        value = _to_number(single_match.group(1))
        if value is not None:
            return value
    return fallback


def _to_number(raw: str) -> float | None:
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value
