# backend/app/core/errors.py
"""
Domain errors raised by the personal secrets service and store.

Every error carries a caller-safe message and the HTTP status the API
renders it with. Internal exception details are logged, never returned.
"""
from typing import Optional

from fastapi import status


class PersonalSecretError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Personal secret request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(PersonalSecretError):
    """Record is absent or owned by someone else; the two are not told apart."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Personal secret not found"


class AuthorizationError(PersonalSecretError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized to update personal secret"


class PersistenceError(PersonalSecretError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Something went wrong while accessing personal secrets"
