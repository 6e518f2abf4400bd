"""
Database engine and sessions for the storefront.

Catalog, favorites, purchases and accounts share one SQLAlchemy database
(SQLite under ./data by default). Request handlers receive a session from
``get_db``; maintenance scripts use ``get_db_context``. Services commit
their own writes.
"""

import os
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from app.config import settings

_is_sqlite = settings.DATABASE_URL.startswith("sqlite")

# SQLite file databases need their directory before the first connect
if settings.DATABASE_URL.startswith("sqlite:///"):
    db_dir = os.path.dirname(settings.DATABASE_URL.replace("sqlite:///", ""))
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    # uvicorn serves sync endpoints from a thread pool
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)

Base = declarative_base()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Create the storefront tables that do not exist yet."""
    from app.models import user, category, product, favorite, purchase  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db() -> Iterator[Session]:
    """FastAPI dependency: one session per request, closed afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Iterator[Session]:
    """Session for code running outside a request, such as scripts/grant_admin.py."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
