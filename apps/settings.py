from typing import Annotated, Literal

from fastapi import Depends, Request
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True, env_prefix="APP_", env_file=".env", extra="ignore"
    )

    SECRET_KEY: str
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] | str = "*"
    API_PREFIX: str = ""

    # single admin credential pair guarding every mutating route
    ADMIN_USERNAME: str
    ADMIN_PASSWORD: str
    TOKEN_ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_DAYS: int = 7

    DATABASE_URL: str = "sqlite+aiosqlite:///./data/database.sqlite"
    AUTO_CREATE_TABLES: bool = True

    STORAGE_BACKEND: Literal["local", "s3"] = "local"
    STORAGE_VOLUME: str = "uploads"
    STORAGE_BASE_PATH: str = "cars"
    STORAGE_URL_PREFIX: str = "http://localhost:8000/uploads"
    STORAGE_TIMEOUT_SECONDS: float = 10

    S3_BUCKET: str | None = None
    S3_ACCESS_KEY: str | None = None
    S3_SECRET_KEY: str | None = None
    S3_REGION: str = "us-east-1"
    S3_PUBLIC_URL_PREFIX: str | None = None

    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024
    MAX_UPLOAD_FILES: int = 20
    ALLOWED_IMAGE_TYPES: list[str] = [
        "image/jpeg",
        "image/png",
        "image/webp",
        "image/gif",
    ]

    @property
    def cors_origins(self) -> list[str]:
        if isinstance(self.CORS_ORIGINS, str):
            return [
                origin.strip()
                for origin in self.CORS_ORIGINS.split(",")
                if origin.strip()
            ]
        return self.CORS_ORIGINS


def get_settings(request: Request) -> AppConfig:
    return request.app.state.settings


SettingsDep = Annotated[AppConfig, Depends(get_settings)]
