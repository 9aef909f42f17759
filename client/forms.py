# client/forms.py
"""
Form shapes for the three kinds of personal secret.

Whatever the kind, the structured value is serialized to a single JSON
string before it is encrypted as the secret's "value" field.
"""
import enum
import json
from datetime import date
from typing import Any, Dict, Mapping, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SecretType(str, enum.Enum):
    WEB_LOGIN = "WEB_LOGIN"
    CREDITCARD = "CREDITCARD"
    SECURE_NOTE = "SECURE_NOTE"


SECRET_TYPE_LABELS = {
    SecretType.WEB_LOGIN: "Web Login",
    SecretType.CREDITCARD: "Credit Card",
    SecretType.SECURE_NOTE: "Secure Note",
}


class WebLoginValue(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=12)


class CreditCardValue(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    card_number: str = Field(..., alias="cardNumber", pattern=r"^\d{16}$")
    expiry_date: date = Field(..., alias="expiryDate")
    cvv: str = Field(..., pattern=r"^\d{3}$")

    @field_validator("expiry_date")
    @classmethod
    def expiry_in_future(cls, v: date) -> date:
        if v <= date.today():
            raise ValueError("Expiry date must be in the future")
        return v


class SecureNoteValue(BaseModel):
    title: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)


SECRET_VALUE_SHAPES: Dict[SecretType, Type[BaseModel]] = {
    SecretType.WEB_LOGIN: WebLoginValue,
    SecretType.CREDITCARD: CreditCardValue,
    SecretType.SECURE_NOTE: SecureNoteValue,
}

# JSON keys shown on the form for each kind, in display order
SECRET_VALUE_KEYS = {
    SecretType.WEB_LOGIN: ("username", "password"),
    SecretType.CREDITCARD: ("cardNumber", "expiryDate", "cvv"),
    SecretType.SECURE_NOTE: ("title", "body"),
}


class SecretForm(BaseModel):
    secret_name: str = Field(..., min_length=5, max_length=100)
    secret_value: str = Field(..., min_length=2)
    secret_type: SecretType

    @classmethod
    def build(cls, secret_name: str, secret_type: SecretType,
              fields: Mapping[str, Any]) -> "SecretForm":
        """Validate the structured fields for the kind and serialize them."""
        secret_type = SecretType(secret_type)
        return cls(
            secret_name=secret_name,
            secret_type=secret_type,
            secret_value=serialize_secret_value(secret_type, fields),
        )


def serialize_secret_value(secret_type: SecretType, fields: Mapping[str, Any]) -> str:
    shape = SECRET_VALUE_SHAPES[SecretType(secret_type)]
    value = shape.model_validate(dict(fields))
    return value.model_dump_json(by_alias=True)


def parse_secret_value(secret_type: SecretType, raw: str) -> Dict[str, str]:
    """
    Read a decrypted value back into form fields.

    Empty, partial or non-JSON values yield empty strings for the missing
    fields rather than an error, so a form can always be prefilled.
    """
    try:
        parsed = json.loads(raw or "{}")
    except json.JSONDecodeError:
        parsed = {}
    if not isinstance(parsed, dict):
        parsed = {}

    keys = SECRET_VALUE_KEYS.get(SecretType(secret_type), ())
    return {key: str(parsed.get(key) or "") for key in keys}
