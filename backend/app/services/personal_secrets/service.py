# backend/app/services/personal_secrets/service.py
"""
Authorization layer in front of the personal secrets store.

Owner keys (user id, organization id) passed in here always come from the
verified session. Owner fields found in a request payload are only ever
compared against them.
"""
import logging
from typing import List

from backend.app.core.errors import AuthorizationError, NotFoundError
from backend.app.models.personal_secret import PersonalSecret
from backend.app.schemas.personal_secret import PersonalSecretCreate, PersonalSecretUpdate
from backend.app.services.personal_secrets.dal import PersonalSecretsDAL

logger = logging.getLogger(__name__)


class PersonalSecretsService:
    def __init__(self, dal: PersonalSecretsDAL):
        self.dal = dal

    async def create_personal_secret(self, data: PersonalSecretCreate, user_id: str,
                                     organization_id: str) -> PersonalSecret:
        # Cipher fields are stored exactly as the client produced them
        return await self.dal.create({
            **data.cipher_fields(),
            "user_id": user_id,
            "organization_id": organization_id,
        })

    async def get_personal_secret(self, user_id: str, organization_id: str,
                                  secret_id: str) -> PersonalSecret:
        secret = await self.dal.find(secret_id, organization_id, user_id)
        if secret is None:
            raise NotFoundError()
        return secret

    async def list_personal_secrets(self, organization_id: str, user_id: str) -> List[PersonalSecret]:
        return await self.dal.find_all(organization_id, user_id)

    async def update_personal_secret(self, secret_id: str, data: PersonalSecretUpdate,
                                     user_id: str, organization_id: str) -> PersonalSecret:
        claimed_user = data.user_id if data.user_id is not None else user_id
        claimed_org = data.organization_id if data.organization_id is not None else organization_id

        if claimed_user != user_id or claimed_org != organization_id:
            logger.warning("Rejected update of personal secret %s: owner mismatch", secret_id)
            raise AuthorizationError()

        secret = await self.dal.update(secret_id, organization_id, user_id, data.cipher_fields())
        if secret is None:
            raise NotFoundError()
        return secret

    async def delete_personal_secret(self, secret_id: str, user_id: str, organization_id: str) -> None:
        deleted = await self.dal.delete_by_id(secret_id, organization_id, user_id)
        if not deleted:
            raise NotFoundError()
