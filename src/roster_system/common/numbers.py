from __future__ import annotations


def round_half_up_ratio(numerator: int, denominator: int) -> int:
    """Round ``numerator / denominator`` to the nearest int, ties going up.

    Works on integers only so float error never flips a tie. Both arguments
    must be non-negative and the denominator non-zero.
    """
    return (2 * numerator + denominator) // (2 * denominator)


def percentage(part: int, whole: int) -> int:
    """Whole-number percentage of ``part`` over ``whole``; 0 when whole is 0."""
    if whole <= 0:
        return 0
    return round_half_up_ratio(100 * part, whole)
