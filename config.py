"""
Configuration management for the Recipe Share AI Service
Centralized settings with validation, loaded from the environment
"""

from enum import Enum
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Environment(str, Enum):
    """Application environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application settings with validation"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Recipe Share AI Service"
    app_version: str = "1.0.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)

    # Security
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:3000"]
    )
    cors_allow_credentials: bool = True
    cors_allow_methods: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE"]
    )
    cors_allow_headers: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["*"])

    # Rate Limiting
    rate_limit_requests: int = Field(default=100, ge=1)  # per minute
    max_request_size: int = Field(default=1024 * 1024, ge=1024)  # 1MB

    # Primary provider (OpenAI)
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_max_tokens: int = Field(default=1200, ge=1)

    # Secondary provider (OpenRouter)
    openrouter_api_key: Optional[str] = None
    openrouter_model: str = "mistralai/mixtral-8x7b-instruct:free"
    openrouter_base_url: str = "https://openrouter.ai/api/v1"

    generation_temperature: float = Field(default=0.7, ge=0.0, le=2.0)

    # Monitoring & Logging
    log_level: LogLevel = LogLevel.INFO
    enable_access_logs: bool = True

    @field_validator("cors_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def parse_comma_separated(cls, v):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("openai_api_key", "openrouter_api_key")
    @classmethod
    def blank_key_is_missing(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v, info):
        env = info.data.get("environment")
        if env == Environment.PRODUCTION and "*" in v:
            raise ValueError("Wildcard CORS origins not allowed in production")
        return v

    @field_validator("debug")
    @classmethod
    def validate_debug(cls, v, info):
        env = info.data.get("environment")
        if env == Environment.PRODUCTION and v:
            raise ValueError("Debug mode not allowed in production")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings"""
    return settings


def validate_production_config(config: Settings) -> List[str]:
    """Validate configuration for production deployment"""
    issues = []

    if config.debug:
        issues.append("Debug mode should be disabled in production")

    if "*" in config.cors_origins:
        issues.append("CORS origins should not include wildcards in production")

    if not config.openai_api_key and not config.openrouter_api_key:
        issues.append("No AI provider key configured; only offline recipes will be served")

    if config.log_level == LogLevel.DEBUG:
        issues.append("Log level should not be DEBUG in production")

    return issues
