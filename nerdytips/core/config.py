"""
@file: config.py
@description:
This module provides centralized configuration management for the NerdyTips backend.
It loads environment variables and provides typed access to configuration settings
used throughout the application.

The configuration includes settings for:
- Application general settings (runtime mode, host/port)
- Database location (embedded SQLite file by default)
- Authentication (JWT signing)
- External APIs (Gemini via its OpenAI-compatible endpoint, Stripe)
- Static client hosting
- Logging parameters

@dependencies:
- pydantic: For settings validation
- pydantic_settings: For environment variable loading
- dotenv: For loading environment variables from .env file

@notes:
- All sensitive configuration is loaded from environment variables
- APP_ENV selects static asset hosting ("production") vs. a permissive
  development setup where the client runs on its own dev server
- The application factory accepts an explicit Settings instance so tests can
  point at a throwaway database
"""

from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from datetime import timedelta

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Provides typed access to all configuration parameters used in the application.
    """
    # Application Settings
    APP_ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./nerdytips.db")
    SEED_ON_STARTUP: bool = Field(default=True)

    # Authentication
    JWT_SECRET: str = Field(default="super-secret-nerdy-tips")
    JWT_ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=1440)

    # External APIs
    GEMINI_API_KEY: Optional[str] = Field(default=None)
    LLM_BASE_URL: str = Field(default=GEMINI_OPENAI_BASE_URL)
    LLM_MODEL: str = Field(default="gemini-2.5-flash")
    LLM_TEMPERATURE: float = Field(default=0.3)
    LLM_TIMEOUT_SECONDS: float = Field(default=30.0)
    LLM_MAX_RETRIES: int = Field(default=1, ge=0)
    STRIPE_SECRET_KEY: Optional[str] = Field(default=None)

    # Client hosting
    STATIC_DIR: str = Field(default="dist")
    CORS_ORIGINS: List[str] = Field(default=["https://nerdytips.ai"])
    CLIENT_DEV_URL: str = Field(default="http://localhost:5173")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @field_validator("APP_ENV", mode="before")
    def normalize_app_env(cls, v: str) -> str:
        """
        Lower-case the runtime mode so "Production" and "production" behave the same.
        """
        return str(v).strip().lower()

    @property
    def ACCESS_TOKEN_EXPIRE_DELTA(self) -> timedelta:
        """
        Convert the access token expiration minutes to a timedelta object.
        """
        return timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"


# Create a global settings object
settings = Settings()