"""
Application settings using Pydantic Settings.

Environment variables are loaded from .env file.
"""
from functools import lru_cache
from typing import Optional
import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.
    
    Create a .env file in the project root with these values.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # ========================================================================
    # Database (PostgreSQL / Supabase direct connection)
    # ========================================================================
    DATABASE_URL: str
    DATABASE_SSLMODE: Optional[str] = "require"
    DATABASE_CONNECT_TIMEOUT: int = 10
    
    # Source tables, one SELECT * each
    TABLE_MOCIONES: str = "mociones"
    TABLE_COAUTORES: str = "coautores"
    TABLE_DIPUTADOS: str = "dim_diputados"
    TABLE_ANALISIS_IA: str = "analisis_ia"
    
    # ========================================================================
    # Dashboard
    # ========================================================================
    # How long the frontend keeps a loaded dataset before reloading
    CACHE_TTL_SECONDS: int = 3600
    
    # ========================================================================
    # Logging
    # ========================================================================
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    
    # ========================================================================
    # Application
    # ========================================================================
    APP_NAME: str = "Observatorio Legislativo"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    
    # Environment (development, staging, production)
    ENVIRONMENT: str = "development"
    
    @property
    def table_names(self) -> dict[str, str]:
        """Map each dataset collection to its source table"""
        return {
            "mociones": self.TABLE_MOCIONES,
            "coautores": self.TABLE_COAUTORES,
            "diputados": self.TABLE_DIPUTADOS,
            "analisis_ia": self.TABLE_ANALISIS_IA,
        }


@lru_cache
def get_settings() -> Settings:
    """Get the settings singleton (read on first use, not at import)."""
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Apply LOG_LEVEL and LOG_FORMAT to the root logger."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=settings.LOG_FORMAT,
    )
