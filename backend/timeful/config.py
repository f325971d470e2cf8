"""Application configuration via pydantic-settings."""

from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default to SQLite in standalone mode
_DEFAULT_DB = "sqlite+aiosqlite:///timeful.db"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Release/debug switch (also set by the --release flag)
    RELEASE: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3002
    LOG_FILE: str = "logs.log"

    # Built frontend, relative to the working directory
    FRONTEND_DIST: str = "../frontend/dist"
    ENTRY_POINT: str = "index.html"

    # Database – defaults to local SQLite so the app works without Docker
    DATABASE_URL: str = _DEFAULT_DB

    # Celery
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/1"

    # Sessions
    SESSION_SECRET: str = "secret"
    SESSION_COOKIE: str = "session"

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:8080",
        "https://timeful-timeful-app.4kaj9t.easypanel.host",
        "https://timeful.viaaha.com.br",
        "https://www.schej.it",
        "https://schej.it",
        "https://www.timeful.app",
        "https://timeful.app",
    ]

    # Link previews
    PRODUCT_NAME: str = "Timeful (formerly Schej)"
    WHEN2MEET_OG_IMAGE: str = "/img/when2meetOgImage2.png"

    @property
    def is_sqlite(self) -> bool:
        return "sqlite" in self.DATABASE_URL


ENV_FILE = ".env"


def env_file_exists(env_file: str = ENV_FILE) -> bool:
    return Path(env_file).is_file()


def load_settings(env_file: str = ENV_FILE, **overrides) -> Settings:
    """Build settings from the environment and an optional env file.

    A missing env file is not an error; containers usually pass everything
    through real environment variables.
    """
    if not env_file_exists(env_file):
        return Settings(_env_file=None, **overrides)
    return Settings(_env_file=env_file, _env_file_encoding="utf-8", **overrides)
