"""
Statistics Utilities

Shared arithmetic for snapshot metrics. Every helper returns a finite,
non-negative number: an empty denominator yields 0, never NaN.

Usage:
    from traceboard.utils.statistics import percentage, average

    coverage = percentage(covered, total)   # int in [0, 100]
    avg_progress = average([40, 80])        # 60.0
"""

import math
from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Python's round() uses banker's rounding (round(2.5) == 2); dashboard
    percentages round 2.5 up to 3.
    """
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percentage(numerator: float, denominator: float) -> int:
    """
    Calculate a whole-number percentage clamped to [0, 100].

    Args:
        numerator: Part count
        denominator: Whole count

    Returns:
        round(numerator / denominator * 100), or 0 when denominator is 0

    Example:
        >>> percentage(1, 3)
        33
        >>> percentage(5, 0)
        0
    """
    if not denominator or denominator <= 0:
        return 0
    return clamp_percentage(round_half_up(numerator / denominator * 100))


def clamp_percentage(value: float) -> int:
    """Clamp a percentage into [0, 100]; NaN and infinities become 0."""
    if not is_finite_number(value):
        return 0
    return int(max(0, min(100, round_half_up(value))))


def non_negative(value: float) -> float:
    """Return value when it is a finite non-negative number, else 0."""
    if not is_finite_number(value) or value < 0:
        return 0
    return value


def average(values: Sequence[float]) -> float:
    """
    Arithmetic mean rounded to one decimal place.

    Args:
        values: Numeric values

    Returns:
        Mean value, or 0.0 for empty input

    Example:
        >>> average([40, 80])
        60.0
    """
    if not values:
        return 0.0
    return round(sum(values) / len(values), 1)


def finite_sum(values: Iterable[float]) -> float:
    """
    Sum values, skipping any that would push the total past float range.

    Non-finite inputs are skipped too, so the result is always finite.

    Example:
        >>> finite_sum([1.5e308, 1.5e308, 10])
        1.5e+308
    """
    total = 0.0
    for value in values:
        if not is_finite_number(value):
            continue
        candidate = total + value
        if math.isfinite(candidate):
            total = candidate
    return total


def is_finite_number(value: object) -> bool:
    """True for int/float values that are not NaN or infinite (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def count_by(values: Iterable[str], keys: Sequence[str]) -> dict[str, int]:
    """
    Count occurrences of each known key.

    Every key in ``keys`` is present in the result (zero when unseen); values
    outside ``keys`` are ignored.

    Example:
        >>> count_by(["booked", "available", "available"], ["available", "booked", "down"])
        {'available': 2, 'booked': 1, 'down': 0}
    """
    counts = {key: 0 for key in keys}
    for value in values:
        if value in counts:
            counts[value] += 1
    return counts
