"""
Per-user favorite products.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from app.models.favorite import Favorite
from app.models.product import Product

logger = logging.getLogger(__name__)


def favorite_id(user_id: int, product_id: int) -> str:
    return f"{user_id}_{product_id}"


class FavoritesService:
    def list_favorites(self, db: Session, user_id: int) -> List[int]:
        """Product ids the user has favorited, oldest first."""
        rows = (
            db.query(Favorite.product_id)
            .filter(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.asc())
            .all()
        )
        return [product_id for (product_id,) in rows]

    def is_favorite(self, db: Session, user_id: int, product_id: int) -> bool:
        return db.get(Favorite, favorite_id(user_id, product_id)) is not None

    def add_favorite(self, db: Session, user_id: int, product_id: int) -> None:
        if self.is_favorite(db, user_id, product_id):
            return
        db.add(
            Favorite(
                id=favorite_id(user_id, product_id),
                user_id=user_id,
                product_id=product_id,
            )
        )
        db.commit()

    def remove_favorite(self, db: Session, user_id: int, product_id: int) -> None:
        favorite = db.get(Favorite, favorite_id(user_id, product_id))
        if favorite is None:
            return
        db.delete(favorite)
        db.commit()

    def toggle_favorite(self, db: Session, user_id: int, product_id: int) -> bool:
        """
        Flip membership and return the new state.

        Read-then-write without a transaction: two concurrent toggles may race.
        """
        if self.is_favorite(db, user_id, product_id):
            self.remove_favorite(db, user_id, product_id)
            new_state = False
        else:
            self.add_favorite(db, user_id, product_id)
            new_state = True
        logger.debug(f"User {user_id} favorite {product_id} -> {new_state}")
        return new_state

    def favorite_products(self, db: Session, user_id: int) -> List[Product]:
        """Catalog products the user has favorited, newest product first."""
        ids = self.list_favorites(db, user_id)
        if not ids:
            return []
        return (
            db.query(Product)
            .filter(Product.id.in_(ids))
            .order_by(Product.created_at.desc(), Product.id.desc())
            .all()
        )


favorites_service = FavoritesService()
