# finance_tracker/core/config.py

from pathlib import Path
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the project root directory (where .env should be located)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore"
    )

    # App Configuration
    APP_NAME: str = "Finance Tracker API"
    DEBUG: bool = False
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    API_PREFIX: str = "/api"

    # Database Configuration
    DATABASE_URL: str = "sqlite+aiosqlite:///./finance_tracker.db"
    # Handy for local runs; production schemas are managed by Alembic
    CREATE_TABLES_ON_STARTUP: bool = True

    # JWT / Security Configuration
    # No default on purpose: tokens are never signed with a made-up key
    SECRET_KEY: Optional[str] = None
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080

    # CORS Configuration
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:3001",
    ]

    @property
    def is_sqlite(self) -> bool:
        """Check if we're running against a SQLite database"""
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def has_secret_key(self) -> bool:
        return bool(self.SECRET_KEY and self.SECRET_KEY.strip())

# Create a global settings instance
settings = Settings()
