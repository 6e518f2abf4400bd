"""
Favorite database model.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.database import Base


class Favorite(Base):
    """
    A (user, product) pair. The primary key is derived from both ids, so a
    user can hold at most one favorite record per product.
    """

    __tablename__ = "favorites"

    id = Column(String, primary_key=True)  # "<user_id>_<product_id>"
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # No foreign key: favorites of a deleted product are simply not listed
    product_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="favorites")
