# client/api.py
"""Async HTTP client for the personal secrets endpoints."""
import logging
from typing import Any, Dict, List, Optional

import httpx

from client.cipher import EncryptedFields, PersonalSecret
from client.config import ClientSettings, get_client_settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


class PersonalSecretsClient:
    """
    Bearer-authenticated wrapper around /personal-secrets.

    Usage:
        async with PersonalSecretsClient(access_token=token) as api:
            secrets = await api.list_secrets()
    """

    def __init__(
        self,
        access_token: str,
        settings: Optional[ClientSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        base_url: Optional[str] = None,
    ):
        self.settings = settings or get_client_settings()
        self._client = httpx.AsyncClient(
            base_url=base_url or self.settings.API_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=self.settings.TIMEOUT,
            transport=transport,
        )
        self._path = f"{self.settings.API_PREFIX}/personal-secrets"

    async def __aenter__(self) -> "PersonalSecretsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        response = await self._client.request(method, url, **kwargs)
        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            logger.debug("%s %s returned %s", method, url, response.status_code)
            raise ApiError(response.status_code, str(detail))
        return response.json()

    async def create_secret(self, secret_type: str, fields: EncryptedFields) -> str:
        body: Dict[str, Any] = {"secretType": secret_type, **fields.model_dump(by_alias=True)}
        return await self._request("POST", self._path, json=body)

    async def get_secret(self, secret_id: str) -> PersonalSecret:
        data = await self._request("GET", f"{self._path}/{secret_id}")
        return PersonalSecret.model_validate(data)

    async def update_secret(self, secret: PersonalSecret, secret_type: str,
                            fields: EncryptedFields) -> PersonalSecret:
        body: Dict[str, Any] = {
            "secretType": secret_type,
            "userId": secret.user_id,
            "organizationId": secret.organization_id,
            **fields.model_dump(by_alias=True),
        }
        data = await self._request("PUT", f"{self._path}/{secret.id}", json=body)
        return PersonalSecret.model_validate(data)

    async def delete_secret(self, secret_id: str) -> bool:
        data = await self._request("DELETE", f"{self._path}/{secret_id}")
        return bool(data.get("success"))

    async def list_secrets(self) -> List[PersonalSecret]:
        data = await self._request("GET", self._path)
        return [PersonalSecret.model_validate(item) for item in data or []]
