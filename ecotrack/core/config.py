"""Application configuration from environment."""
from pathlib import Path

from pydantic_settings import BaseSettings

# Package directory (ecotrack/)
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "EcoTrack"
    debug: bool = False

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3000

    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./ecotrack.db"

    # Session cookie signing
    secret_key: str = "change-me-in-production-use-env"
    session_cookie_name: str = "ecotrack_session"
    session_max_age: int = 60 * 60 * 24 * 7  # 7 days
    session_backend: str = "memory"  # memory | database
    cookie_secure: bool = False

    # bcrypt work factor
    bcrypt_rounds: int = 10

    # Entry page and client assets
    static_dir: str = str(BASE_DIR / "static")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()
