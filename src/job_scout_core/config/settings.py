"""Application settings using pydantic-settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for job-scout."""

    model_config = SettingsConfigDict(env_prefix="SCOUT_", env_file=".env")

    # --- Browser ---
    headless: bool = Field(
        default=True,
        description="Run Chromium headless; a visible browser is harder to detect",
    )
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
        description="User agent reported by every browsing context",
    )
    viewport_width: int = Field(default=1920, description="Viewport width in pixels")
    viewport_height: int = Field(default=1080, description="Viewport height in pixels")
    locale: str = Field(default="en-US", description="Browser locale")
    timezone_id: str = Field(default="America/New_York", description="Browser timezone")

    # --- Search ---
    search_engine: Literal["duckduckgo", "google"] = Field(
        default="duckduckgo",
        description="Engine used for site-filtered searches",
    )
    max_results_per_domain: int = Field(
        default=50,
        ge=1,
        description="Default cap on listings extracted per target domain",
    )

    # --- Timeouts ---
    navigation_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for a single search-page navigation",
    )
    field_timeout_seconds: float = Field(
        default=0.5,
        gt=0,
        description="Timeout for one field extractor on one result container",
    )
    consent_timeout_seconds: float = Field(
        default=2.0,
        gt=0,
        description="Timeout for clicking a cookie-consent button",
    )

    # --- Delays ---
    settle_delay_min_seconds: float = Field(default=1.0, ge=0)
    settle_delay_max_seconds: float = Field(default=4.0, ge=0)
    domain_delay_min_seconds: float = Field(
        default=3.0,
        ge=0,
        description="Lower bound of the pause between two target domains",
    )
    domain_delay_max_seconds: float = Field(
        default=10.0,
        ge=0,
        description="Upper bound of the pause between two target domains",
    )
    human_pause_min_seconds: float = Field(default=0.2, ge=0)
    human_pause_max_seconds: float = Field(default=0.5, ge=0)

    # --- Logging ---
    log_level: str = Field(default="INFO", description="Root log level")
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="structlog renderer",
    )

    # --- Tracing ---
    otel_exporter: Literal["none", "console", "otlp"] = Field(
        default="none",
        description="OpenTelemetry span exporter",
    )
    otel_endpoint: str = Field(
        default="http://localhost:4317",
        description="OTLP collector endpoint",
    )
    otel_service_name: str = Field(default="job-scout", description="OTEL service name")

    # --- Persistence ---
    database_url: str = Field(
        default="sqlite+aiosqlite:///./job_scout.db",
        description="SQLAlchemy database URL for the listing sink",
    )
    persist_results: bool = Field(
        default=True,
        description="Insert scraped listings into the database from the CLI",
    )

    @model_validator(mode="after")
    def validate_delay_windows(self) -> Settings:
        """Ensure every delay window has min <= max."""
        windows = {
            "settle_delay": (self.settle_delay_min_seconds, self.settle_delay_max_seconds),
            "domain_delay": (self.domain_delay_min_seconds, self.domain_delay_max_seconds),
            "human_pause": (self.human_pause_min_seconds, self.human_pause_max_seconds),
        }
        for name, (low, high) in windows.items():
            if low > high:
                msg = f"{name} window is inverted: min ({low}) > max ({high})"
                raise ValueError(msg)
        return self
