"""
Product database model.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime, Index

from app.database import Base


class Product(Base):
    """Affiliate product listed in the catalog."""

    __tablename__ = "products"
    __table_args__ = (
        Index("idx_product_category", "category", "subcategory"),
        Index("idx_product_created", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    # Category and subcategory are stored by name, not by foreign key
    category = Column(String, nullable=False, index=True)
    subcategory = Column(String, nullable=False, default="")
    original_price = Column(Float, nullable=False, default=0.0)
    discount_price = Column(Float, nullable=False, default=0.0)
    cost_per_use = Column(Float, nullable=True, default=0.0)
    usage_unit = Column(String, nullable=False, default="ml")  # e.g. "ml", "L", "kg", "pzas"
    usage_amount = Column(String, nullable=False, default="")
    affiliate_url = Column(String, nullable=False)
    image_url = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
