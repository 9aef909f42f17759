# backend/app/api/deps.py
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.base import get_db
from backend.app.models.organization import Organization
from backend.app.models.user import User
from backend.app.schemas.user import SessionContext, TokenPayload
from backend.app.security import jwt
from backend.app.services.personal_secrets import PersonalSecretsDAL, PersonalSecretsService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

credentials_exception = HTTPException(
    status_code=status.HTTP_403_FORBIDDEN,
    detail="Could not validate credentials",
)


async def get_current_session(
        db: AsyncSession = Depends(get_db),
        credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> SessionContext:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise credentials_exception

    try:
        payload = jwt.decode_access_token(credentials.credentials)
        token_data = TokenPayload(**payload)
    except (JWTError, ValidationError):
        raise credentials_exception

    user = await db.get(User, token_data.sub)
    if user is None or not user.is_active:
        logger.info("Rejected session for unknown or inactive user")
        raise credentials_exception

    organization = await db.get(Organization, token_data.org_id)
    if organization is None:
        logger.info("Rejected session for unknown organization")
        raise credentials_exception

    return SessionContext(user_id=user.id, organization_id=organization.id)


def get_personal_secrets_service(db: AsyncSession = Depends(get_db)) -> PersonalSecretsService:
    return PersonalSecretsService(PersonalSecretsDAL(db))
