# client/config.py
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """
    Settings for the personal secrets client.

    Read from COFFER_* environment variables or a .env file.
    """

    API_URL: str = "http://localhost:8000"
    API_PREFIX: str = "/api/v1"
    # Local persistent storage for the private key and session token
    KEYSTORE_PATH: Path = Path.home() / ".coffer" / "keystore.json"
    TIMEOUT: float = 10.0

    model_config = SettingsConfigDict(
        env_prefix="COFFER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_client_settings() -> ClientSettings:
    return ClientSettings()
