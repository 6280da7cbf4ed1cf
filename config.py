import os
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_BASE_DIR = Path(__file__).parent
_ENV_FILE = _BASE_DIR / ".env"


class Settings(BaseSettings):
    api_url: str = "http://localhost:5000"
    request_timeout: float = 30.0          # seconds, applied to every call
    token_file: str = str(_BASE_DIR / "config.json")
    refresh_path: str = "/api/auth/refresh"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="ERP_",
        env_file=str(_ENV_FILE) if os.path.exists(_ENV_FILE) else None,
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
