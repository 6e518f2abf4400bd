"""
Savings statistics over a user's purchase history.
"""

from datetime import datetime
from typing import Any, Dict, Iterable

from app.services.pricing import round_half_up


def month_key(purchased_at) -> str:
    """'YYYY-MM' bucket for a purchase; undated purchases count in the current month."""
    when = purchased_at or datetime.now()
    return f"{when.year:04d}-{when.month:02d}"


def _accumulate(groups: Dict[str, Dict[str, Any]], key: str, purchase) -> None:
    bucket = groups.setdefault(key, {"count": 0, "savings": 0.0, "spent": 0.0})
    bucket["count"] += 1
    bucket["savings"] += purchase.savings
    bucket["spent"] += purchase.discount_price


def compute_stats(purchases: Iterable) -> Dict[str, Any]:
    """
    Summarise purchases for the savings dashboard.

    Totals are plain sums of the stored fields; nothing is validated, so a NaN
    price propagates into the sums. ``avg_savings_percent`` is 0 when nothing
    was spent at original price. Category keys are used verbatim (an empty
    string is its own group).
    """
    total_savings = 0.0
    total_spent = 0.0
    total_original = 0.0
    count = 0
    by_category: Dict[str, Dict[str, Any]] = {}
    by_month: Dict[str, Dict[str, Any]] = {}

    for p in purchases:
        count += 1
        total_savings += p.savings
        total_spent += p.discount_price
        total_original += p.original_price
        _accumulate(by_category, p.category, p)
        _accumulate(by_month, month_key(p.purchased_at), p)

    avg_savings_percent = (
        round_half_up(100 * total_savings / total_original) if total_original > 0 else 0
    )

    return {
        "total_savings": total_savings,
        "total_spent": total_spent,
        "total_original": total_original,
        "avg_savings_percent": avg_savings_percent,
        "total_purchases": count,
        "by_category": by_category,
        "by_month": by_month,
    }
