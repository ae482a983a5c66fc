from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import List
import os
from pydantic import ConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    # Database settings
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./catalog.db")
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "5"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "15"))
    DB_ECHO: bool = os.getenv("DB_ECHO", "false").lower() == "true"
    CREATE_TABLES_ON_STARTUP: bool = (
        os.getenv("CREATE_TABLES_ON_STARTUP", "true").lower() == "true"
    )

    # API settings
    API_PREFIX: str = os.getenv("API_PREFIX", "/api/v1")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")  # comma-separated

    # Business settings
    LOW_STOCK_THRESHOLD: int = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))

    # Other settings
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "info")
    LOG_DIR: str = os.getenv("LOG_DIR", "")

    @property
    def cors_origins(self) -> List[str]:
        """CORS origins as a list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite (no connection pool sizing)"""
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def sync_database_url(self) -> str:
        """Database URL with the async driver swapped for a sync one (used by Alembic)"""
        url = self.DATABASE_URL
        url = url.replace("+aiosqlite", "")
        url = url.replace("+asyncpg", "+psycopg2")
        return url

    model_config = ConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


settings = Settings()
