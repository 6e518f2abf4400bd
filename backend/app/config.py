"""
Configuration settings for the Rinde storefront API.

Loads environment variables from .env file and provides typed configuration.
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Security Configuration
    SECRET_KEY: str = Field(
        default="5f1c0b7e2d9a4c3e8b6f0a1d2c3e4f5a6b7c8d9e0f1a2b3c4d5e6f7a8b9c0d1e",
        description="Secret key for JWT",
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=30, description="Access token expiration time in minutes"
    )
    AUTH_RATE_LIMIT: str = Field(
        default="5/minute", description="Rate limit for sign-in endpoints"
    )
    ADMIN_EMAILS: List[str] = Field(
        default=[], description="Emails promoted to administrator on sign-up/startup"
    )

    # Federated sign-in (identity provider tokens)
    FEDERATED_JWT_KEY: str = Field(
        default="", description="Key used to verify federated identity tokens"
    )
    FEDERATED_JWT_ALGORITHMS: List[str] = Field(
        default=["HS256"], description="Accepted federated token algorithms"
    )
    FEDERATED_JWT_AUDIENCE: str | None = Field(
        default=None, description="Expected audience of federated tokens"
    )

    # Database Configuration
    DATABASE_URL: str = Field(
        default="sqlite:///./data/rindestore.db", description="Database URL"
    )
    DATABASE_ECHO: bool = Field(
        default=False, description="Echo SQL queries (for debugging)"
    )

    # Image storage Configuration
    MAX_UPLOAD_SIZE: int = Field(
        default=5 * 1024 * 1024,  # 5 MB
        description="Maximum image upload size in bytes",
    )
    UPLOAD_DIR: str = Field(
        default="./data/uploads", description="Directory for uploaded product images"
    )
    MEDIA_URL: str = Field(
        default="/media", description="Public URL prefix for uploaded images"
    )
    ALLOWED_IMAGE_EXTENSIONS: List[str] = Field(
        default=[".png", ".jpg", ".jpeg", ".webp", ".gif"],
        description="Allowed file extensions for product images",
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()
