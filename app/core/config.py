# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./maintenance_portal.db")
    APP_NAME: str = "Maintenance Portal"
    APP_DESC: str = "Maintenance ticket tracking"
    APP_VERSION: str = "1.0.0"

    # Auth cookie + token
    SECRET_KEY: str = Field(default="change-me-in-production")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 14
    AUTH_COOKIE_NAME: str = "maintenance_portal_auth"
    AUTH_COOKIE_SECURE: bool = False
    LOGIN_PATH: str = "/User/Login"

    DEFAULT_PAGE_SIZE: int = Field(default=10, gt=0)
    LOG_LEVEL: str = "INFO"

    # Start-up seeding
    SEED_ADMIN: bool = True
    SEED_SAMPLE_DATA: bool = False

    # Comma separated, "*" when unset
    CORS_ORIGINS: str | None = None

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
