# backend/app/security/jwt.py
"""
Session bearer tokens.

Tokens are HS256 JWTs whose claims name the user (`sub`) and the
organization (`org_id`) the session acts in.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt

from backend.app.core.config import settings


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode["exp"] = datetime.now(timezone.utc) + expires_delta
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_session_token(user_id: str, organization_id: str,
                         expires_delta: Optional[timedelta] = None) -> str:
    return create_access_token({"sub": user_id, "org_id": organization_id}, expires_delta)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Raises jose.JWTError when the signature or expiry does not verify."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
