"""Application configuration from environment."""
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Perceptions Cruising"
    service_name: str = "perceptions-cruising-api"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./perceptions_cruising.db"

    # CORS (JSON list in env, e.g. CORS_ORIGINS='["http://localhost:5173"]')
    cors_origins: list[str] = ["*"]

    # Load data/scenarios.json into an empty catalog at startup
    seed_on_startup: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()


# Package directory (holds data/)
BASE_DIR = Path(__file__).resolve().parent.parent
