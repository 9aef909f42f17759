# backend/app/schemas/user.py
from dataclasses import dataclass

from pydantic import BaseModel, Field


class TokenPayload(BaseModel):
    """Claims carried by a session bearer token."""
    sub: str = Field(..., min_length=1)
    org_id: str = Field(..., min_length=1)


@dataclass(frozen=True)
class SessionContext:
    """
    Verified identity of the caller.

    The only source of owner keys handed to the personal secrets service.
    """
    user_id: str
    organization_id: str
