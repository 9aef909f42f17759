# backend/app/db/base.py
"""
SQLAlchemy declarative base and re-exports of the session components.

Models inherit from Base; endpoints and scripts import engine/get_db
from here as well as from db.session.
"""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Usage:
        class Organization(Base):
            __tablename__ = "organizations"
            id = Column(String(36), primary_key=True)
            ...
    """
    pass


from backend.app.db.session import (  # noqa: E402
    engine,
    AsyncSessionLocal,
    get_db,
)

__all__ = [
    "Base",
    "engine",
    "AsyncSessionLocal",
    "get_db",
]
