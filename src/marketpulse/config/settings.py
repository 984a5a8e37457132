# src/marketpulse/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables or a local .env file.

Files that USE this module:
- marketpulse.app (logging configuration)
- marketpulse.adapters.upstream (HTTP timeout and user agent)
- marketpulse.adapters.providers.* (upstream base URLs, EIA key)
- marketpulse.application.* (fallback USD/CAD rate, per-section timeout)

Files that this module USES:
- None
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Upstreams ---
    er_api_url: str = Field(default="https://open.er-api.com/v6/latest/USD", alias="ER_API_URL")
    coinbase_url: str = Field(default="https://api.exchange.coinbase.com", alias="COINBASE_URL")
    swissquote_url: str = Field(
        default="https://forex-data-feed.swissquote.com/public-quotes/bboquotes/instrument",
        alias="SWISSQUOTE_URL",
    )
    cboe_url: str = Field(
        default="https://cdn.cboe.com/api/global/delayed_quotes/quotes", alias="CBOE_URL"
    )
    eia_url: str = Field(default="https://api.eia.gov/v2/petroleum/pri/spt/data/", alias="EIA_URL")
    eia_api_key: str = Field(default="DEMO_KEY", alias="EIA_API_KEY")

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)
    user_agent: str = Field(default="marketpulse/1.0", alias="USER_AGENT")

    # --- Aggregation ---
    # Used for crypto CAD prices whenever the forex section has no USD/CAD rate
    fallback_usd_cad_rate: float = Field(default=1.44, alias="FALLBACK_USD_CAD_RATE", gt=0.0)
    # Unset means each section is only bounded by its HTTP timeouts
    section_timeout_seconds: Optional[float] = Field(
        default=None, alias="SNAPSHOT_SECTION_TIMEOUT_SECONDS", gt=0.0
    )

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("er_api_url", "coinbase_url", "swissquote_url", "cboe_url", "eia_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Upstream URLs must be absolute http(s) URLs; trailing slashes are kept as given."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Upstream URL must start with http:// or https://")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level name."""
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return v


# Global settings instance
settings = Settings()
