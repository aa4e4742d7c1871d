"""Configuration module using pydantic-settings for type-safe env variable loading."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationMissing(Exception):
    """Raised when a required configuration value is absent.

    A missing credential is a deployment defect, so this is never retried.
    """

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = list(missing_fields)
        names = ", ".join(field.upper() for field in self.missing_fields)
        super().__init__(f"Required configuration is not set: {names}")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Uses pydantic-settings for type-safe configuration with validation.
    Automatically loads from .env file if present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Search provider
    tavily_api_key: str = Field(
        default="",
        description="Tavily search API key (required on first search)",
    )
    search_timeout: float = Field(
        default=30.0,
        gt=0,
        le=120,
        description="Timeout in seconds for search provider requests",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Quota windows
    rate_limit_anonymous_daily: int = Field(
        default=3,
        ge=1,
        description="Maximum messages per day for anonymous identities",
    )
    rate_limit_authenticated_daily: int = Field(
        default=5,
        ge=1,
        description="Maximum messages per day for signed-in identities",
    )

    # RAG context transport
    max_rag_header_chars: int = Field(
        default=6000,
        ge=16,
        description="Largest encoded value allowed in a single RAG image header",
    )
    rag_backend_url: str = Field(
        default="",
        description="Base URL of the RAG backend, used to resolve relative image paths",
    )

    # HTTP
    cors_allow_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed by the CORS middleware (JSON list in the environment)",
    )

    def validate_required(self) -> None:
        """Check every required field at once.

        Raises:
            ConfigurationMissing: listing all required fields that are empty
        """
        missing = [name for name in ("tavily_api_key",) if not getattr(self, name)]
        if missing:
            raise ConfigurationMissing(missing)


@lru_cache
def get_settings() -> Settings:
    """Settings for the HTTP surface, built once per process."""
    return Settings()
