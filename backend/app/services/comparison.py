"""
Side-by-side comparison: pick the competing product for a chosen one and
work out which of the two is the better deal.
"""

from typing import Any, Dict, Iterable, Optional

from app.services.pricing import savings_percent


def comparison_candidates(target, catalog: Iterable) -> list:
    """Other products in the target's category (and subcategory, when it has one)."""
    return [
        p
        for p in catalog
        if p.id != target.id
        and p.category == target.category
        and (not target.subcategory or p.subcategory == target.subcategory)
    ]


def select_comparison(target, catalog: Iterable):
    """
    Return the cheapest other product competing with ``target``, or None.

    Ties on ``discount_price`` go to the lowest id. The result is the cheapest
    *other* product even when ``target`` itself is cheaper.
    """
    candidates = comparison_candidates(target, catalog)
    if not candidates:
        return None
    return min(candidates, key=lambda p: (p.discount_price, p.id))


def compare_products(target, candidate: Optional[Any]) -> Dict[str, Any]:
    """Winner, absolute price gap and savings percentages for the comparison view."""
    result = {
        "target": target,
        "candidate": candidate,
        "winner": None,
        "price_diff": 0.0,
        "target_savings_percent": savings_percent(target),
        "candidate_savings_percent": None,
    }
    if candidate is None:
        return result

    result["winner"] = (
        "target" if target.discount_price <= candidate.discount_price else "candidate"
    )
    result["price_diff"] = abs(target.discount_price - candidate.discount_price)
    result["candidate_savings_percent"] = savings_percent(candidate)
    return result
