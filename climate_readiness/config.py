"""Application configuration via environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration for the AASB S2 readiness service."""

    # Application
    app_name: str = "AASB S2 Readiness"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(default="development", pattern=r"^(development|staging|production)$")
    log_level: str = "INFO"
    log_format: str = "json"

    # API
    api_prefix: str = "/api"
    allowed_origins: str = "http://localhost:8080"
    rate_limit_default: str = "100/minute"
    rate_limit_burst: str = "200/minute"

    # PDF export service (headless browser renderer)
    renderer_url: str = "http://localhost:8787"
    renderer_timeout_seconds: float = Field(default=60.0, gt=0)

    # Scoring constants
    neutral_severity: int = Field(default=2, ge=0)
    readiness_low_threshold: float = 20.0
    readiness_mid_threshold: float = 40.0

    # Mandatory reporting start dates per group
    group1_start_date: str = "2025-01-01"
    group2_start_date: str = "2026-07-01"
    group3_start_date: str = "2027-07-01"

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",")]

    @property
    def tier_start_dates(self) -> dict[int, str]:
        return {
            1: self.group1_start_date,
            2: self.group2_start_date,
            3: self.group3_start_date,
        }

    model_config = {"env_prefix": "READINESS_", "env_file": ".env", "extra": "ignore"}


def get_settings() -> Settings:
    """Build settings from the environment and .env file."""
    return Settings()
