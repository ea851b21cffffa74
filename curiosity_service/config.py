# curiosity_service/config.py
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    SERVICE_NAME: str = "curiosity-service"
    SERVICE_PORT: int = 8015
    ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    # LLM config
    LLM_PROVIDER: str = "gemini"
    GEMINI_MODEL_ID: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"

    # Local operator's default key; callers may override per request
    GEMINI_API_KEY: Optional[str] = None

    # Optional
    REQUEST_TIMEOUT_S: int = 60

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("GEMINI_BASE_URL")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        if "://" not in v:
            raise ValueError("GEMINI_BASE_URL must be an absolute URL")
        return v.rstrip("/")

settings = Settings()
