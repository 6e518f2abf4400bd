"""
Price arithmetic shared by the catalog filters, comparisons and statistics.
"""

import math


def round_half_up(value: float) -> float:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2).

    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    return int(math.floor(value + 0.5))


def savings_ratio(product) -> float:
    """Fraction saved against the original price, clamped to >= 0.

    A missing or zero original price means no savings.
    """
    if not product.original_price:
        return 0.0
    return max(0.0, 1 - product.discount_price / product.original_price)


def savings_percent(product) -> int:
    """Whole-number discount percentage shown on product cards (not clamped)."""
    if not product.original_price:
        return 0
    return round_half_up(100 * (1 - product.discount_price / product.original_price))
