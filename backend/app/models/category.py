"""
Category database model.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, JSON

from app.database import Base


class Category(Base):
    """Product category with an ordered list of subcategory names."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    icon = Column(String, nullable=False, default="")  # Short label or emoji
    subcategories = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
