# backend/app/api/v1/endpoints/personal_secrets.py
from typing import List

from fastapi import APIRouter, Depends, status

from backend.app.api import deps
from backend.app.schemas.personal_secret import (
    DeleteResponse,
    PersonalSecretCreate,
    PersonalSecretResponse,
    PersonalSecretUpdate,
)
from backend.app.schemas.user import SessionContext
from backend.app.services.personal_secrets import PersonalSecretsService

router = APIRouter()


# 1. CREATE (POST) - returns only the new identifier
@router.post("", response_model=str, status_code=status.HTTP_201_CREATED)
async def create_personal_secret(
        secret_in: PersonalSecretCreate,
        session: SessionContext = Depends(deps.get_current_session),
        service: PersonalSecretsService = Depends(deps.get_personal_secrets_service),
):
    secret = await service.create_personal_secret(
        secret_in,
        user_id=session.user_id,
        organization_id=session.organization_id,
    )
    return secret.id


# 2. READ ONE (GET)
@router.get("/{secret_id}", response_model=PersonalSecretResponse)
async def read_personal_secret(
        secret_id: str,
        session: SessionContext = Depends(deps.get_current_session),
        service: PersonalSecretsService = Depends(deps.get_personal_secrets_service),
):
    return await service.get_personal_secret(
        session.user_id, session.organization_id, secret_id.strip()
    )


# 3. UPDATE (PUT) - full replacement of the cipher fields
@router.put("/{secret_id}", response_model=PersonalSecretResponse)
async def update_personal_secret(
        secret_id: str,
        secret_in: PersonalSecretUpdate,
        session: SessionContext = Depends(deps.get_current_session),
        service: PersonalSecretsService = Depends(deps.get_personal_secrets_service),
):
    return await service.update_personal_secret(
        secret_id.strip(),
        secret_in,
        user_id=session.user_id,
        organization_id=session.organization_id,
    )


# 4. DELETE
@router.delete("/{secret_id}", response_model=DeleteResponse)
async def delete_personal_secret(
        secret_id: str,
        session: SessionContext = Depends(deps.get_current_session),
        service: PersonalSecretsService = Depends(deps.get_personal_secrets_service),
):
    await service.delete_personal_secret(
        secret_id.strip(), session.user_id, session.organization_id
    )
    return {"success": True}


# 5. LIST (GET) - everything the caller owns in the caller's organization
@router.get("", response_model=List[PersonalSecretResponse])
async def list_personal_secrets(
        session: SessionContext = Depends(deps.get_current_session),
        service: PersonalSecretsService = Depends(deps.get_personal_secrets_service),
):
    return await service.list_personal_secrets(session.organization_id, session.user_id)
