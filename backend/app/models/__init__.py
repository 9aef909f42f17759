from backend.app.models.organization import Organization
from backend.app.models.user import User
from backend.app.models.personal_secret import PersonalSecret, SecretType

__all__ = ["Organization", "User", "PersonalSecret", "SecretType"]
