"""End-to-end tests for /api/v1/personal-secrets."""
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api import deps
from backend.app.main import app
from backend.app.security.jwt import create_session_token
from backend.app.services.personal_secrets import PersonalSecretsDAL, PersonalSecretsService

URL = "/api/v1/personal-secrets"

CIPHER_KEYS = (
    "secretNameCipher", "secretValueCipher",
    "secretNameIV", "secretValueIV",
    "secretNameAuthTag", "secretValueAuthTag",
)


async def create(api_client, headers, body):
    response = await api_client.post(URL, json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateAndGet:
    @pytest.mark.asyncio
    async def test_create_returns_identifier_and_get_returns_same_fields(
            self, api_client, owners, auth_headers, cipher_payload):
        headers = auth_headers(owners.alice, owners.acme)
        body = cipher_payload("WEB_LOGIN")

        secret_id = await create(api_client, headers, body)
        assert isinstance(secret_id, str) and secret_id

        response = await api_client.get(f"{URL}/{secret_id}", headers=headers)
        assert response.status_code == 200
        data = response.json()
        for key in CIPHER_KEYS:
            assert data[key] == body[key]
        assert data["id"] == secret_id
        assert data["secretType"] == "WEB_LOGIN"
        assert data["userId"] == owners.alice
        assert data["organizationId"] == owners.acme
        assert data["algorithm"] == "aes-256-gcm"
        assert data["version"] == 1
        assert data["createdAt"] and data["updatedAt"]

    @pytest.mark.asyncio
    async def test_client_supplied_algorithm_and_owner_are_ignored(
            self, api_client, owners, auth_headers, cipher_payload):
        headers = auth_headers(owners.alice, owners.acme)
        body = {**cipher_payload(), "algorithm": "rot13", "version": 7,
                "userId": owners.bob, "organizationId": owners.globex}

        secret_id = await create(api_client, headers, body)
        data = (await api_client.get(f"{URL}/{secret_id}", headers=headers)).json()
        assert data["algorithm"] == "aes-256-gcm"
        assert data["version"] == 1
        assert data["userId"] == owners.alice
        assert data["organizationId"] == owners.acme


class TestValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", CIPHER_KEYS)
    async def test_missing_cipher_field_rejected_before_write(
            self, api_client, owners, auth_headers, cipher_payload, missing):
        headers = auth_headers(owners.alice, owners.acme)
        body = cipher_payload()
        del body[missing]

        response = await api_client.post(URL, json=body, headers=headers)
        assert response.status_code == 422

        listing = await api_client.get(URL, headers=headers)
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_unknown_secret_type_rejected(self, api_client, owners, auth_headers, cipher_payload):
        response = await api_client.post(
            URL, json=cipher_payload("BANK_ACCOUNT"), headers=auth_headers(owners.alice, owners.acme)
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_empty_cipher_string_rejected(self, api_client, owners, auth_headers, cipher_payload):
        body = {**cipher_payload(), "secretValueAuthTag": ""}
        response = await api_client.post(URL, json=body, headers=auth_headers(owners.alice, owners.acme))
        assert response.status_code == 422


class TestOwnership:
    @pytest.mark.asyncio
    async def test_foreign_and_missing_secrets_look_identical(
            self, api_client, owners, auth_headers, cipher_payload):
        secret_id = await create(api_client, auth_headers(owners.alice, owners.acme), cipher_payload())

        foreign = await api_client.get(f"{URL}/{secret_id}", headers=auth_headers(owners.bob, owners.acme))
        missing = await api_client.get(f"{URL}/not-a-secret", headers=auth_headers(owners.bob, owners.acme))

        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json() == {"detail": "Personal secret not found"}

    @pytest.mark.asyncio
    async def test_same_user_other_organization_cannot_read(
            self, api_client, owners, auth_headers, cipher_payload):
        secret_id = await create(api_client, auth_headers(owners.alice, owners.acme), cipher_payload())
        response = await api_client.get(f"{URL}/{secret_id}", headers=auth_headers(owners.alice, owners.globex))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_returns_exactly_callers_secrets(
            self, api_client, owners, auth_headers, cipher_payload):
        alice_acme = auth_headers(owners.alice, owners.acme)
        mine = {
            await create(api_client, alice_acme, cipher_payload("WEB_LOGIN")),
            await create(api_client, alice_acme, cipher_payload("CREDITCARD")),
        }
        await create(api_client, auth_headers(owners.bob, owners.acme), cipher_payload())
        await create(api_client, auth_headers(owners.alice, owners.globex), cipher_payload())

        response = await api_client.get(URL, headers=alice_acme)
        assert response.status_code == 200
        assert {item["id"] for item in response.json()} == mine


class TestUpdate:
    @pytest.mark.asyncio
    async def test_put_replaces_cipher_fields(self, api_client, owners, auth_headers, cipher_payload):
        headers = auth_headers(owners.alice, owners.acme)
        secret_id = await create(api_client, headers, cipher_payload())
        replacement = cipher_payload("SECURE_NOTE", "Wifi password", '{"title": "Home", "body": "hunter2"}')

        response = await api_client.put(f"{URL}/{secret_id}", json=replacement, headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == secret_id
        assert data["secretType"] == "SECURE_NOTE"
        for key in CIPHER_KEYS:
            assert data[key] == replacement[key]

    @pytest.mark.asyncio
    async def test_put_with_mismatched_organization_is_rejected(
            self, api_client, owners, auth_headers, cipher_payload):
        # alice owns the secret in acme; the body claims globex, where alice is also a member
        secret_id = await create(api_client, auth_headers(owners.alice, owners.acme), cipher_payload())
        body = {**cipher_payload(), "userId": owners.alice, "organizationId": owners.globex}

        response = await api_client.put(
            f"{URL}/{secret_id}", json=body, headers=auth_headers(owners.alice, owners.acme)
        )
        assert response.status_code == 403
        assert response.json() == {"detail": "Unauthorized to update personal secret"}

    @pytest.mark.asyncio
    async def test_put_on_foreign_secret_is_not_found(self, api_client, owners, auth_headers, cipher_payload):
        secret_id = await create(api_client, auth_headers(owners.alice, owners.acme), cipher_payload())
        response = await api_client.put(
            f"{URL}/{secret_id}", json=cipher_payload(), headers=auth_headers(owners.bob, owners.acme)
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_put_requires_full_payload(self, api_client, owners, auth_headers, cipher_payload):
        headers = auth_headers(owners.alice, owners.acme)
        secret_id = await create(api_client, headers, cipher_payload())
        partial = {"secretType": "WEB_LOGIN", "secretNameCipher": "bmV3"}

        response = await api_client.put(f"{URL}/{secret_id}", json=partial, headers=headers)
        assert response.status_code == 422


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_returns_success(self, api_client, owners, auth_headers, cipher_payload):
        headers = auth_headers(owners.alice, owners.acme)
        secret_id = await create(api_client, headers, cipher_payload())

        response = await api_client.delete(f"{URL}/{secret_id}", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"success": True}

        assert (await api_client.get(f"{URL}/{secret_id}", headers=headers)).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_foreign_secret_is_not_found(self, api_client, owners, auth_headers, cipher_payload):
        secret_id = await create(api_client, auth_headers(owners.alice, owners.acme), cipher_payload())

        response = await api_client.delete(f"{URL}/{secret_id}", headers=auth_headers(owners.bob, owners.acme))
        assert response.status_code == 404

        still_there = await api_client.get(f"{URL}/{secret_id}", headers=auth_headers(owners.alice, owners.acme))
        assert still_there.status_code == 200


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_missing_token(self, api_client, owners):
        response = await api_client.get(URL)
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_garbage_token(self, api_client, owners):
        response = await api_client.get(URL, headers={"Authorization": "Bearer not.a.jwt"})
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_expired_token(self, api_client, owners):
        token = create_session_token(owners.alice, owners.acme, expires_delta=timedelta(minutes=-1))
        response = await api_client.get(URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_organization(self, api_client, owners, auth_headers):
        response = await api_client.get(URL, headers=auth_headers(owners.alice, "no-such-org"))
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_user(self, api_client, owners, auth_headers):
        response = await api_client.get(URL, headers=auth_headers("ghost", owners.acme))
        assert response.status_code == 403


class TestStorageFailure:
    @pytest.mark.asyncio
    async def test_storage_error_renders_generic_500(self, api_client, owners, auth_headers):
        broken_db = AsyncMock(spec=AsyncSession)
        broken_db.execute.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
        app.dependency_overrides[deps.get_personal_secrets_service] = (
            lambda: PersonalSecretsService(PersonalSecretsDAL(broken_db))
        )

        response = await api_client.get(URL, headers=auth_headers(owners.alice, owners.acme))

        assert response.status_code == 500
        assert response.json() == {"detail": "Something went wrong while accessing personal secrets"}
        broken_db.rollback.assert_awaited_once()
