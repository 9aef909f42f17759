# backend/app/models/organization.py
from uuid import uuid4

from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from backend.app.db.base import Base


class Organization(Base):
    """Tenant boundary; personal secrets are scoped to one organization."""

    __tablename__ = "organizations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(100), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
