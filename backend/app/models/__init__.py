"""
Database models for the Rinde storefront API.

All SQLAlchemy models are imported here so they register with ``Base``.
"""

from app.models.user import User, RevokedToken
from app.models.category import Category
from app.models.product import Product
from app.models.favorite import Favorite
from app.models.purchase import Purchase

__all__ = [
    "User",
    "RevokedToken",
    "Category",
    "Product",
    "Favorite",
    "Purchase",
]
