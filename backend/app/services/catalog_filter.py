"""
Product listing filters: free-text search, category, subcategory and savings tier.
"""

import enum
from typing import Iterable, List

from app.services.pricing import savings_ratio

ALL = "all"


class SavingsTier(str, enum.Enum):
    ALL = "all"
    AT_LEAST_15 = "15"
    AT_LEAST_25 = "25"


TIER_THRESHOLDS = {
    SavingsTier.AT_LEAST_15: 0.15,
    SavingsTier.AT_LEAST_25: 0.25,
}


def matches_search(product, search_term: str) -> bool:
    """Case-insensitive substring match against name, category and subcategory."""
    needle = (search_term or "").lower()
    if not needle:
        return True
    fields = (product.name, product.category, product.subcategory)
    return any(field and needle in field.lower() for field in fields)


def matches_tier(product, savings_tier) -> bool:
    threshold = TIER_THRESHOLDS.get(SavingsTier(savings_tier))
    if threshold is None:
        return True
    return savings_ratio(product) >= threshold


def filter_products(
    products: Iterable,
    search_term: str = "",
    category: str = ALL,
    subcategory: str = ALL,
    savings_tier=SavingsTier.ALL,
) -> List:
    """
    Apply all listing filters (logical AND) keeping the input order.

    ``category`` and ``subcategory`` use exact equality unless set to "all".
    """
    return [
        p
        for p in products
        if matches_search(p, search_term)
        and (category == ALL or p.category == category)
        and (subcategory == ALL or p.subcategory == subcategory)
        and matches_tier(p, savings_tier)
    ]
