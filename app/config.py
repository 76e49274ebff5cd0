"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="MacroLog", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings
    database_url: str = Field(
        default="postgresql+psycopg2://user@localhost:5432/macrolog",
        description="SQLAlchemy connection URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Macro estimator (OpenAI-compatible chat completion service)
    moonshot_api_key: Optional[str] = Field(
        default=None, description="Bearer credential for the completion service"
    )
    estimator_base_url: str = Field(
        default="https://api.moonshot.cn/v1",
        description="Base URL of the chat completion API",
    )
    estimator_model: str = Field(
        default="moonshot-v1-8k", description="Model identifier sent upstream"
    )
    estimator_temperature: float = Field(
        default=0.1, ge=0, le=2, description="Sampling temperature"
    )
    estimator_timeout_sec: Optional[float] = Field(
        default=None,
        gt=0,
        description="Upstream request timeout; the HTTP client default when unset",
    )
    estimator_max_attempts: int = Field(
        default=1, ge=1, le=10, description="Attempts per estimation (1 = no retry)"
    )
    estimator_retry_multiplier_sec: float = Field(
        default=0.5, ge=0, description="Backoff multiplier between attempts"
    )
    estimator_retry_max_wait_sec: float = Field(
        default=8.0, ge=0, description="Upper bound for a single backoff wait"
    )

    # Identity provider (JWT verification)
    auth_jwt_secret: Optional[str] = Field(
        default=None, description="Shared secret used to verify access tokens"
    )
    auth_jwt_audience: Optional[str] = Field(
        default="authenticated", description="Expected token audience"
    )
    auth_jwt_algorithms: list[str] = Field(
        default=["HS256"], description="Accepted token signing algorithms"
    )

    # Validation
    meal_text_max_length: int = Field(
        default=500, ge=1, description="Maximum meal description length"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="/api", description="API route prefix")
    api_title: str = Field(default="MacroLog API", description="API documentation title")
    api_description: str = Field(
        default="Natural-language meal logging with AI macro estimates",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT


# Global settings instance
settings = Settings()
