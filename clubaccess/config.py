"""
Application Configuration
Loads settings from environment variables
"""

import logging
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from .env file"""

    # Application
    APP_ENV: str = "development"
    APP_NAME: str = "ClubAccess"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    # Database
    DATABASE_URL: str = "sqlite:///./clubaccess.db"

    # JWT (tokens are issued by the hosted auth provider, we only verify them)
    JWT_SECRET_KEY: str = "temp-jwt-secret-change-later"
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: Optional[str] = "authenticated"

    # Invitations
    INVITE_DEFAULT_TTL_DAYS: Optional[int] = 7

    # File Upload
    MAX_UPLOAD_SIZE: int = 5242880  # 5MB
    ALLOWED_LOGO_TYPES: str = "image/jpeg,image/png,image/gif,image/svg+xml,image/webp"

    # Storage (Supabase)
    SUPABASE_URL: Optional[str] = None
    SUPABASE_KEY: Optional[str] = None
    STORAGE_BUCKET: str = "club-logos"

    class Config:
        env_file = ".env"
        case_sensitive = True


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the service"""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


# Create global settings instance
settings = Settings()
