"""
Purchase database model.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.database import Base


class Purchase(Base):
    """
    Self-reported purchase holding a snapshot of the product's pricing.

    ``savings`` is stored at write time and never recomputed.
    """

    __tablename__ = "purchases"
    __table_args__ = (
        Index("idx_purchase_user_date", "user_id", "purchased_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(Integer, nullable=False)
    product_name = Column(String, nullable=False)
    product_image = Column(String, nullable=True)
    category = Column(String, nullable=False, default="")
    subcategory = Column(String, nullable=True)
    original_price = Column(Float, nullable=False)
    discount_price = Column(Float, nullable=False)
    savings = Column(Float, nullable=False)
    cost_per_use = Column(Float, nullable=True)
    usage_unit = Column(String, nullable=True)
    purchased_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="purchases")
