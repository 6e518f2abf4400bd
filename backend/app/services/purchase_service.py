"""
Purchase history: recording, removal and savings statistics.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.models.product import Product
from app.models.purchase import Purchase
from app.services.savings import compute_stats

logger = logging.getLogger(__name__)


class PurchaseService:
    def list_purchases(self, db: Session, user_id: int) -> List[Purchase]:
        """The user's purchases, most recent first."""
        return (
            db.query(Purchase)
            .filter(Purchase.user_id == user_id)
            .order_by(Purchase.purchased_at.desc(), Purchase.id.desc())
            .all()
        )

    def add_purchase(self, db: Session, record: Dict[str, Any]) -> Purchase:
        """Store a purchase record as given; ``purchased_at`` is set here."""
        purchase = Purchase(**record, purchased_at=datetime.utcnow())
        db.add(purchase)
        db.commit()
        db.refresh(purchase)
        logger.info(
            f"User {purchase.user_id} recorded purchase of product {purchase.product_id}"
        )
        return purchase

    def record_product_purchase(
        self, db: Session, user_id: int, product: Product
    ) -> Purchase:
        """Snapshot the product's current pricing into a new purchase."""
        return self.add_purchase(
            db,
            {
                "user_id": user_id,
                "product_id": product.id,
                "product_name": product.name,
                "product_image": product.image_url,
                "category": product.category,
                "subcategory": product.subcategory,
                "original_price": product.original_price,
                "discount_price": product.discount_price,
                "savings": product.original_price - product.discount_price,
                "cost_per_use": product.cost_per_use,
                "usage_unit": product.usage_unit,
            },
        )

    def remove_purchase(self, db: Session, user_id: int, purchase_id: int) -> None:
        purchase = (
            db.query(Purchase)
            .filter(Purchase.id == purchase_id, Purchase.user_id == user_id)
            .first()
        )
        if not purchase:
            raise HTTPException(status_code=404, detail="Purchase not found")
        db.delete(purchase)
        db.commit()

    def savings_stats(self, db: Session, user_id: int) -> Dict[str, Any]:
        return compute_stats(self.list_purchases(db, user_id))


purchase_service = PurchaseService()
