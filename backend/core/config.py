from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

FLW_BASE = "https://api.flutterwave.com/v3"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    FLW_SECRET_KEY: str = ""
    FLW_SECRET_HASH: str = ""
    WEBHOOK_URL: str = ""
    FLW_BASE_URL: str = FLW_BASE
    CORS_ORIGINS: list[str] = ["*"]
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
