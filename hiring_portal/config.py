"""Application configuration using Pydantic Settings."""

from typing import Any, List, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Hiring Portal API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    RELOAD: bool = False
    API_PREFIX: str = "/api"
    CORS_ORIGINS: Union[str, List[str]] = ["*"]

    # JWT
    SECRET_KEY: str = Field(default="your-secret-key-here-change-in-production")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Passwords
    BCRYPT_ROUNDS: int = 10
    DEFAULT_CANDIDATE_PASSWORD: str = "defaultCandidatePassword"

    # Storage
    STORAGE_TYPE: str = "memory"  # "memory" or "sql"
    DATABASE_URL: str = "sqlite:///./hiring_portal.db"

    # Chat
    AUTO_REPLY_DELAY_SECONDS: float = 2.0
    AUTO_REPLY_MESSAGE: str = (
        "Thanks for your message! I'd be happy to discuss further. "
        "When's a good time for a call?"
    )

    # Demo data
    SEED_DEMO_DATA: bool = True
    DEMO_MANAGER_EMAIL: str = "manager@example.com"
    DEMO_MANAGER_PASSWORD: str = "Hiring2025"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # "json" or "console"

    # Monitoring
    SENTRY_DSN: str = ""
    SENTRY_ENVIRONMENT: str = "production"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Any) -> List[str]:
        """Parse comma-separated origins."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


settings = Settings()
