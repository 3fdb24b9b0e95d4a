"""Configuration management using pydantic-settings."""
import logging

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
import structlog


class CatalogSettings(BaseSettings):
    """Catalog client settings loaded from environment variables.

    All settings prefixed with WINE_CATALOG_ (e.g., WINE_CATALOG_FETCH_LIMIT=500)
    """

    # Backend Configuration
    api_base_url: str = Field(
        default="https://opener-api.onrender.com",
        description="Base URL of the wine catalog API"
    )
    request_timeout: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Read timeout in seconds"
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts on connection errors"
    )

    # Pagination Configuration
    per_page: int = Field(
        default=100,
        ge=1,
        description="Requested page size (the server currently ignores it)"
    )
    fetch_limit: int = Field(
        default=10000,
        ge=1,
        description="Default number of records to aggregate on initial load"
    )
    page_concurrency: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum page requests in flight at once"
    )
    page_delay_seconds: float = Field(
        default=0.05,
        ge=0.0,
        le=5.0,
        description="Pause after each page fetch before releasing its slot"
    )

    # Search Configuration
    fuzzy_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Similarity score >= this counts as a fuzzy match"
    )
    search_debounce_seconds: float = Field(
        default=0.3,
        ge=0.0,
        le=10.0,
        description="Quiet period before a remote search fires"
    )

    # Comparison Configuration
    max_compare: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Maximum wines selectable for comparison"
    )

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="WINE_CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = CatalogSettings()


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog for JSON logging."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=log_level.upper())


configure_logging(settings.log_level)
