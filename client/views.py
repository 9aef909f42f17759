# client/views.py
"""
The personal secrets workflow: add, view/edit, delete and a searchable table.

Every action derives the AES key from the passed-in Credentials at the
moment it runs. Without a private key the action stops before any request
is sent and the user is told to log in again.
"""
import logging
from typing import Callable, Iterable, List, Optional

from client.api import ApiError, PersonalSecretsClient
from client.cipher import (
    DecryptedPersonalSecret,
    DecryptionError,
    decrypt_secret,
    encrypt_fields,
)
from client.forms import SECRET_TYPE_LABELS, SecretForm, SecretType, parse_secret_value
from client.keystore import Credentials, PrivateKeyMissingError

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "DELETE"

# (kind, text) where kind is "success" or "error"
Notifier = Callable[[str, str], None]


def log_notification(kind: str, text: str) -> None:
    level = logging.ERROR if kind == "error" else logging.INFO
    logger.log(level, text)


class ConfirmationError(Exception):
    pass


def matches_search(secret: DecryptedPersonalSecret, search: str) -> bool:
    needle = search.lower()
    return (
        needle in secret.secret_name.lower()
        or needle in secret.secret_value.lower()
        or needle in secret.secret_type.lower()
    )


def filter_secrets(secrets: Iterable[DecryptedPersonalSecret],
                   search: str = "") -> List[DecryptedPersonalSecret]:
    return [secret for secret in secrets if matches_search(secret, search)]


def extract_identifier(secret: DecryptedPersonalSecret) -> str:
    """The field that identifies a secret at a glance in the table."""
    try:
        secret_type = SecretType(secret.secret_type)
    except ValueError:
        return ""
    fields = parse_secret_value(secret_type, secret.secret_value)
    if secret_type == SecretType.WEB_LOGIN:
        return fields["username"]
    if secret_type == SecretType.CREDITCARD:
        return fields["cardNumber"]
    return fields["title"]


def render_table(secrets: List[DecryptedPersonalSecret]) -> str:
    if not secrets:
        return "No secrets found"

    headers = ("Secret Name", "Created", "Type", "Identifier", "ID")
    rows = [
        (
            secret.secret_name,
            secret.created_at.strftime("%a %b %d %Y") if secret.created_at else "",
            SECRET_TYPE_LABELS.get(secret.secret_type, secret.secret_type),
            extract_identifier(secret),
            secret.id,
        )
        for secret in secrets
    ]
    widths = [max(len(str(cell)) for cell in column) for column in zip(headers, *rows)]
    lines = ["  ".join(str(cell).ljust(width) for cell, width in zip(line, widths)).rstrip()
             for line in (headers, *rows)]
    lines.insert(1, "  ".join("-" * width for width in widths))
    return "\n".join(lines)


class PersonalSecretsView:
    def __init__(self, api: PersonalSecretsClient, credentials: Credentials,
                 notify: Optional[Notifier] = None):
        self.api = api
        self.credentials = credentials
        self.notify = notify if notify is not None else log_notification

    def _symmetric_key(self) -> bytes:
        try:
            return self.credentials.symmetric_key()
        except PrivateKeyMissingError as exc:
            self.notify("error", str(exc))
            raise

    async def add_secret(self, form: SecretForm) -> str:
        key = self._symmetric_key()
        fields = encrypt_fields(form.secret_name, form.secret_value, key)
        try:
            secret_id = await self.api.create_secret(form.secret_type.value, fields)
        except ApiError:
            self.notify("error", "Failed to create secret. Please try again.")
            raise
        self.notify("success", f"Successfully created secret: {form.secret_name}")
        return secret_id

    async def edit_secret(self, secret: DecryptedPersonalSecret,
                          form: SecretForm) -> DecryptedPersonalSecret:
        key = self._symmetric_key()
        fields = encrypt_fields(form.secret_name, form.secret_value, key)
        try:
            current = await self.api.get_secret(secret.id)
            updated = await self.api.update_secret(current, form.secret_type.value, fields)
        except ApiError:
            self.notify("error", "Failed to update secret")
            raise
        self.notify("success", f"Successfully updated secret: {form.secret_name}")
        return decrypt_secret(updated, key)

    async def delete_secret(self, secret_id: str, confirmation: str) -> None:
        if confirmation != DELETE_CONFIRMATION:
            self.notify("error", "Confirmation text is incorrect")
            raise ConfirmationError(f"Type '{DELETE_CONFIRMATION}' to confirm")
        try:
            await self.api.delete_secret(secret_id)
        except ApiError:
            self.notify("error", "Failed to delete secret")
            raise
        self.notify("success", "Successfully deleted secret")

    async def view_secret(self, secret_id: str) -> DecryptedPersonalSecret:
        key = self._symmetric_key()
        try:
            secret = await self.api.get_secret(secret_id)
        except ApiError:
            self.notify("error", "Failed to load secret")
            raise
        return self._decrypt(secret, key)

    async def list_secrets(self, search: str = "") -> List[DecryptedPersonalSecret]:
        key = self._symmetric_key()
        try:
            secrets = await self.api.list_secrets()
        except ApiError:
            self.notify("error", "Failed to load secrets")
            raise
        decrypted = [self._decrypt(secret, key) for secret in secrets]
        return filter_secrets(decrypted, search)

    def _decrypt(self, secret, key: bytes) -> DecryptedPersonalSecret:
        try:
            return decrypt_secret(secret, key)
        except DecryptionError:
            self.notify("error", f"Cannot decrypt personal secret {secret.id}")
            raise
