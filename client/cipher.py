# client/cipher.py
"""
Client-side field encryption for personal secrets.

The symmetric key is the SHA-256 digest of the user's private key string.
Each field is sealed with AES-256-GCM under a fresh 96-bit IV, and the
result is kept as a (ciphertext, iv, tag) triple of base64 strings that
always travel together.

Security Notes:
    - The server only ever sees the triples, never the key or plaintext
    - A triple that fails tag verification raises DecryptionError; no
      partially decrypted output is returned
"""
import base64
import binascii
import hashlib
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from pydantic import BaseModel, ConfigDict, Field

KEY_SIZE = 32  # 256 bits
IV_SIZE = 12  # 96 bits, NIST recommended for GCM
TAG_SIZE = 16  # 128 bits
ALGORITHM = "aes-256-gcm"


class DecryptionError(Exception):
    """The ciphertext, IV, tag or key did not verify; the secret cannot be decrypted."""

    def __init__(self, message: str = "Cannot decrypt secret"):
        super().__init__(message)


@dataclass(frozen=True)
class CipherField:
    ciphertext: str
    iv: str
    tag: str


class EncryptedFields(BaseModel):
    """The six cipher strings of a secret, dumped with their wire names."""
    model_config = ConfigDict(populate_by_name=True)

    secret_name_cipher: str = Field(alias="secretNameCipher")
    secret_value_cipher: str = Field(alias="secretValueCipher")
    secret_name_iv: str = Field(alias="secretNameIV")
    secret_value_iv: str = Field(alias="secretValueIV")
    secret_name_auth_tag: str = Field(alias="secretNameAuthTag")
    secret_value_auth_tag: str = Field(alias="secretValueAuthTag")
    algorithm: str = ALGORITHM


class PersonalSecret(EncryptedFields):
    """A personal secret as returned by the API."""

    id: str
    user_id: str = Field(alias="userId")
    organization_id: str = Field(alias="organizationId")
    secret_type: str = Field(alias="secretType")
    version: int = 1
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class DecryptedPersonalSecret(BaseModel):
    id: str
    user_id: str
    organization_id: str
    secret_type: str
    secret_name: str
    secret_value: str
    algorithm: str
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def hash_private_key(private_key: str) -> bytes:
    """Derive the 32-byte AES key from the user's private key string."""
    return hashlib.sha256(private_key.encode("utf-8")).digest()


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _unb64(data: str) -> bytes:
    return base64.b64decode(data.encode("ascii"), validate=True)


def encrypt(text: str, secret: Union[bytes, str]) -> CipherField:
    """
    Encrypt a UTF-8 string with AES-256-GCM.

    Args:
        text: Plaintext to seal (can be empty)
        secret: 32-byte key, or a private key string that is hashed first

    Returns:
        CipherField with base64 ciphertext, iv and tag
    """
    key = hash_private_key(secret) if isinstance(secret, str) else secret
    if len(key) != KEY_SIZE:
        raise ValueError(f"Key must be exactly {KEY_SIZE} bytes")

    iv = os.urandom(IV_SIZE)
    sealed = AESGCM(key).encrypt(iv, text.encode("utf-8"), None)
    # AESGCM appends the tag to the ciphertext
    ciphertext, tag = sealed[:-TAG_SIZE], sealed[-TAG_SIZE:]
    return CipherField(ciphertext=_b64(ciphertext), iv=_b64(iv), tag=_b64(tag))


def decrypt(ciphertext: str, iv: str, tag: str, secret: Union[bytes, str]) -> str:
    """
    Verify and decrypt one (ciphertext, iv, tag) triple.

    Raises:
        DecryptionError: wrong key, altered ciphertext/iv/tag, or malformed input
    """
    key = hash_private_key(secret) if isinstance(secret, str) else secret
    try:
        raw_iv = _unb64(iv)
        raw_tag = _unb64(tag)
        sealed = _unb64(ciphertext) + raw_tag
        if len(key) != KEY_SIZE or len(raw_iv) != IV_SIZE or len(raw_tag) != TAG_SIZE:
            raise DecryptionError()
        plaintext = AESGCM(key).decrypt(raw_iv, sealed, None)
        return plaintext.decode("utf-8")
    except (InvalidTag, binascii.Error, ValueError) as exc:
        raise DecryptionError() from exc


def encrypt_fields(secret_name: str, secret_value: str,
                   hashed_private_key: bytes) -> EncryptedFields:
    """Encrypt name and value independently, each with its own IV and tag."""
    name = encrypt(secret_name, hashed_private_key)
    value = encrypt(secret_value, hashed_private_key)
    return EncryptedFields(
        secret_name_cipher=name.ciphertext,
        secret_name_iv=name.iv,
        secret_name_auth_tag=name.tag,
        secret_value_cipher=value.ciphertext,
        secret_value_iv=value.iv,
        secret_value_auth_tag=value.tag,
    )


def decrypt_secret(secret: PersonalSecret, hashed_private_key: bytes) -> DecryptedPersonalSecret:
    return DecryptedPersonalSecret(
        id=secret.id,
        user_id=secret.user_id,
        organization_id=secret.organization_id,
        secret_type=secret.secret_type,
        version=secret.version,
        algorithm=secret.algorithm,
        created_at=secret.created_at,
        updated_at=secret.updated_at,
        secret_name=decrypt(
            secret.secret_name_cipher,
            secret.secret_name_iv,
            secret.secret_name_auth_tag,
            hashed_private_key,
        ),
        secret_value=decrypt(
            secret.secret_value_cipher,
            secret.secret_value_iv,
            secret.secret_value_auth_tag,
            hashed_private_key,
        ),
    )
