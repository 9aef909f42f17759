# backend/app/services/personal_secrets/dal.py
"""
Record store for personal secrets.

Every single-record query filters on the secret id AND the owning
organization AND the owning user. A row owned by someone else is therefore
indistinguishable from a row that does not exist.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.errors import PersistenceError
from backend.app.models.personal_secret import PersonalSecret

logger = logging.getLogger(__name__)


class PersonalSecretsDAL:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _owned(self, secret_id: str, organization_id: str, user_id: str):
        return select(PersonalSecret).where(
            PersonalSecret.id == secret_id,
            PersonalSecret.organization_id == organization_id,
            PersonalSecret.user_id == user_id,
        )

    async def _fail(self, action: str) -> PersistenceError:
        logger.exception("Personal secrets %s failed", action)
        await self.db.rollback()
        return PersistenceError()

    async def create(self, data: Dict[str, Any]) -> PersonalSecret:
        try:
            secret = PersonalSecret(**data)
            self.db.add(secret)
            await self.db.commit()
            await self.db.refresh(secret)
            return secret
        except SQLAlchemyError:
            raise await self._fail("create")

    async def find(self, secret_id: str, organization_id: str, user_id: str) -> Optional[PersonalSecret]:
        try:
            result = await self.db.execute(self._owned(secret_id, organization_id, user_id))
            return result.scalars().first()
        except SQLAlchemyError:
            raise await self._fail("find")

    async def find_all(self, organization_id: str, user_id: str) -> List[PersonalSecret]:
        query = (
            select(PersonalSecret)
            .where(
                PersonalSecret.organization_id == organization_id,
                PersonalSecret.user_id == user_id,
            )
            .order_by(PersonalSecret.created_at, PersonalSecret.id)
        )
        try:
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError:
            raise await self._fail("find all")

    async def update(self, secret_id: str, organization_id: str, user_id: str,
                     data: Dict[str, Any]) -> Optional[PersonalSecret]:
        """Replace the category and all cipher fields of an owned secret."""
        try:
            result = await self.db.execute(self._owned(secret_id, organization_id, user_id))
            secret = result.scalars().first()
            if secret is None:
                return None

            for key, value in data.items():
                setattr(secret, key, value)

            self.db.add(secret)
            await self.db.commit()
            await self.db.refresh(secret)
            return secret
        except SQLAlchemyError:
            raise await self._fail("update")

    async def delete_by_id(self, secret_id: str, organization_id: str, user_id: str) -> bool:
        query = delete(PersonalSecret).where(
            PersonalSecret.id == secret_id,
            PersonalSecret.organization_id == organization_id,
            PersonalSecret.user_id == user_id,
        )
        try:
            result = await self.db.execute(query)
            await self.db.commit()
            return result.rowcount > 0
        except SQLAlchemyError:
            raise await self._fail("delete")
