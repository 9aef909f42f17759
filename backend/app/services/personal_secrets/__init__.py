from backend.app.services.personal_secrets.dal import PersonalSecretsDAL
from backend.app.services.personal_secrets.service import PersonalSecretsService

__all__ = ["PersonalSecretsDAL", "PersonalSecretsService"]
