# backend/app/api/v1/router.py
from fastapi import APIRouter
from backend.app.api.v1.endpoints import personal_secrets

api_router = APIRouter()
api_router.include_router(
    personal_secrets.router, prefix="/personal-secrets", tags=["personal-secrets"]
)
