"""
Shared pytest fixtures.
"""
import sys
import os
from datetime import datetime, timedelta
from typing import Generator
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Add backend directory to sys.path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../backend"))

from app.database import Base
from app.models.user import User
from app.models.product import Product
from app.models.category import Category
from app.models.purchase import Purchase
from app.services.storage_service import LocalImageStorage


@pytest.fixture
def test_db() -> Generator[Session, None, None]:
    """Create in-memory SQLite database for testing"""
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)


@pytest.fixture
def storage(tmp_path) -> LocalImageStorage:
    """Image storage rooted in a temporary directory"""
    return LocalImageStorage(tmp_path / "uploads", "/media")


@pytest.fixture
def make_product():
    """Factory for unsaved products; only the pricing/category fields matter."""
    def _make(id, category="Limpieza", discount_price=10.0, original_price=20.0,
              subcategory="", name=None):
        return Product(
            id=id,
            name=name or f"Producto {id}",
            category=category,
            subcategory=subcategory,
            original_price=original_price,
            discount_price=discount_price,
            affiliate_url=f"https://tienda.example/p/{id}",
        )
    return _make


@pytest.fixture
def make_purchase():
    """Factory for unsaved purchases"""
    def _make(category="Limpieza", original_price=100.0, discount_price=70.0,
              savings=None, purchased_at=datetime(2024, 1, 15, 12, 0)):
        return Purchase(
            user_id=1,
            product_id=1,
            product_name="Detergente",
            category=category,
            original_price=original_price,
            discount_price=discount_price,
            savings=original_price - discount_price if savings is None else savings,
            purchased_at=purchased_at,
        )
    return _make


@pytest.fixture
def user(test_db) -> User:
    user = User(email="shopper@example.com", hashed_password="x", is_active=True)
    test_db.add(user)
    test_db.commit()
    test_db.refresh(user)
    return user


@pytest.fixture
def admin_user(test_db) -> User:
    admin = User(email="admin@example.com", hashed_password="x", is_active=True,
                 is_superuser=True)
    test_db.add(admin)
    test_db.commit()
    test_db.refresh(admin)
    return admin


@pytest.fixture
def catalog(test_db):
    """Persisted catalog: two cleaning products, one drink, created in that order."""
    now = datetime.utcnow()
    products = [
        Product(name="Detergente Ariel 3L", category="Limpieza", subcategory="Detergente",
                original_price=250.0, discount_price=180.0, cost_per_use=3.6,
                usage_unit="ml", usage_amount="3000",
                affiliate_url="https://tienda.example/ariel",
                created_at=now - timedelta(days=3)),
        Product(name="Detergente Persil 3L", category="Limpieza", subcategory="Detergente",
                original_price=230.0, discount_price=150.0, cost_per_use=3.0,
                usage_unit="ml", usage_amount="3000",
                affiliate_url="https://tienda.example/persil",
                created_at=now - timedelta(days=2)),
        Product(name="Agua mineral 12 pzas", category="Bebidas", subcategory="Agua",
                original_price=120.0, discount_price=110.0,
                usage_unit="pzas", usage_amount="12",
                affiliate_url="https://tienda.example/agua",
                created_at=now - timedelta(days=1)),
    ]
    test_db.add_all(products)
    test_db.add(Category(name="Limpieza", icon="🧽", subcategories=["Detergente", "Suavizante"]))
    test_db.add(Category(name="Bebidas", icon="🥤", subcategories=["Agua"]))
    test_db.commit()
    for p in products:
        test_db.refresh(p)
    return products
