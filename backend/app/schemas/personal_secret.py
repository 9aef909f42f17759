# backend/app/schemas/personal_secret.py
"""
Pydantic schemas for the personal secrets endpoints.

The JSON wire format is camelCase; attributes are snake_case and match the
ORM columns so validated payloads can be handed to the store as-is.
Only ciphertext, IVs and auth tags ever cross the wire; the plaintext
name and value stay on the client.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from backend.app.models.personal_secret import SecretType


CIPHER_FIELDS = (
    "secret_name_cipher",
    "secret_name_iv",
    "secret_name_auth_tag",
    "secret_value_cipher",
    "secret_value_iv",
    "secret_value_auth_tag",
)


class PersonalSecretCreate(BaseModel):
    """
    Body of POST /personal-secrets.

    All six cipher strings are required. Unknown fields sent by clients
    (algorithm, version, ...) are ignored; the server sets those itself.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    secret_type: SecretType = Field(..., alias="secretType")
    secret_name_cipher: str = Field(..., alias="secretNameCipher", min_length=1)
    secret_value_cipher: str = Field(..., alias="secretValueCipher", min_length=1)
    secret_name_iv: str = Field(..., alias="secretNameIV", min_length=1)
    secret_value_iv: str = Field(..., alias="secretValueIV", min_length=1)
    secret_name_auth_tag: str = Field(..., alias="secretNameAuthTag", min_length=1)
    secret_value_auth_tag: str = Field(..., alias="secretValueAuthTag", min_length=1)

    def cipher_fields(self) -> dict:
        """Category plus the six cipher strings, keyed by column name."""
        return self.model_dump(include={"secret_type", *CIPHER_FIELDS})


class PersonalSecretUpdate(PersonalSecretCreate):
    """
    Body of PUT /personal-secrets/{id}: a full replacement of the cipher fields.

    Owner fields are optional. When present they are only compared with the
    verified session, never used as query keys.
    """
    user_id: Optional[str] = Field(None, alias="userId")
    organization_id: Optional[str] = Field(None, alias="organizationId")


class PersonalSecretResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str = Field(serialization_alias="userId")
    organization_id: str = Field(serialization_alias="organizationId")
    secret_type: SecretType = Field(serialization_alias="secretType")
    secret_name_cipher: str = Field(serialization_alias="secretNameCipher")
    secret_value_cipher: str = Field(serialization_alias="secretValueCipher")
    secret_name_iv: str = Field(serialization_alias="secretNameIV")
    secret_value_iv: str = Field(serialization_alias="secretValueIV")
    secret_name_auth_tag: str = Field(serialization_alias="secretNameAuthTag")
    secret_value_auth_tag: str = Field(serialization_alias="secretValueAuthTag")
    algorithm: str
    version: int
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")


class DeleteResponse(BaseModel):
    success: bool
