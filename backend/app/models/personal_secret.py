# backend/app/models/personal_secret.py
import enum
from uuid import uuid4

from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, Enum
from sqlalchemy.sql import func
from backend.app.db.base import Base


DEFAULT_ALGORITHM = "aes-256-gcm"


class SecretType(str, enum.Enum):
    WEB_LOGIN = "WEB_LOGIN"
    CREDITCARD = "CREDITCARD"
    SECURE_NOTE = "SECURE_NOTE"


class PersonalSecret(Base):
    __tablename__ = "personal_secrets"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))

    # --- OWNER (set once at creation, never updated) ---
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    organization_id = Column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    secret_type = Column(
        Enum(SecretType, name="personal_secret_type"),
        nullable=False,
    )

    # --- SECRET DATA (server never sees plaintext) ---
    # Each field is a (ciphertext, iv, auth tag) triple, all base64,
    # written and read together.
    secret_name_cipher = Column(Text, nullable=False)
    secret_name_iv = Column(String(64), nullable=False)
    secret_name_auth_tag = Column(String(64), nullable=False)

    secret_value_cipher = Column(Text, nullable=False)
    secret_value_iv = Column(String(64), nullable=False)
    secret_value_auth_tag = Column(String(64), nullable=False)

    algorithm = Column(String(32), nullable=False, default=DEFAULT_ALGORITHM)
    # Informational only, no migration logic reads it yet
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )
