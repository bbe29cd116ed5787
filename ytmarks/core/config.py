"""
Application configuration settings.
Loads from environment variables (and an optional .env file) with type checking.
"""

from pathlib import Path
from pydantic import validator
from pydantic_settings import BaseSettings
from typing import List

STORAGE_BACKENDS = ("file", "memory", "database")


class Settings(BaseSettings):
    # Application Metadata
    PROJECT_TITLE: str = "YouTube Timestamp Bookmarks API"
    PROJECT_DESCRIPTION: str = "Save, annotate and revisit timestamps within YouTube videos"
    PROJECT_VERSION: str = "1.0.0"
    HOST: str = "127.0.0.1"
    PORT: int = 3000
    ENVIRONMENT: str = "development"  # or 'testing', 'production'

    # Persistence
    STORAGE_BACKEND: str = "file"
    BOOKMARKS_FILE: Path = Path("bookmarks.json")
    STORAGE_FILE: Path = Path("storage.json")
    DATABASE_URL: str = "sqlite+aiosqlite:///./bookmarks.db"
    DATABASE_ECHO: bool = False

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",")]
        return v

    @validator("STORAGE_BACKEND")
    def validate_storage_backend(cls, v):
        v = v.lower()
        if v not in STORAGE_BACKENDS:
            raise ValueError(f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}")
        return v

    @property
    def ASYNC_DATABASE_URL(self) -> str:
        """DATABASE_URL with an async driver for plain postgres URLs"""
        return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"


settings = Settings()
