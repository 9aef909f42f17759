# client/keystore.py
"""
Local storage for the user's private key and session token.

The rest of the client never reads storage directly: it is handed a
Credentials object, so the cipher and the workflow can be exercised with
any key in isolation.
"""
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from client.cipher import hash_private_key

logger = logging.getLogger(__name__)

PRIVATE_KEY_FIELD = "PRIVATE_KEY"
ACCESS_TOKEN_FIELD = "ACCESS_TOKEN"

MISSING_PRIVATE_KEY_MESSAGE = "Your private key is missing. Please logout and login again."


class PrivateKeyMissingError(Exception):
    def __init__(self, message: str = MISSING_PRIVATE_KEY_MESSAGE):
        super().__init__(message)


@dataclass(frozen=True)
class Credentials:
    access_token: Optional[str] = None
    private_key: Optional[str] = None

    def require_private_key(self) -> str:
        if not self.private_key:
            raise PrivateKeyMissingError()
        return self.private_key

    def symmetric_key(self) -> bytes:
        """Hash the private key into the AES-256 key, fresh on every call."""
        return hash_private_key(self.require_private_key())


class PrivateKeyStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Credentials:
        if not self.path.exists():
            return Credentials()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable keystore at %s", self.path)
            return Credentials()
        return Credentials(
            access_token=data.get(ACCESS_TOKEN_FIELD),
            private_key=data.get(PRIVATE_KEY_FIELD),
        )

    def save(self, credentials: Credentials) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            ACCESS_TOKEN_FIELD: credentials.access_token,
            PRIVATE_KEY_FIELD: credentials.private_key,
        }
        # Owner read/write only, from the moment the file exists
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(json.dumps(payload))
        # An older file keeps its mode across O_TRUNC
        os.chmod(self.path, 0o600)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
