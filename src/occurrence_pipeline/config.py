"""
Application settings.

Values come from environment variables prefixed with ``OCCURRENCE_`` (or a
local ``.env`` file), falling back to the defaults below.

Example::

    OCCURRENCE_SPECIES_NAME="Vanessa cardui" OCCURRENCE_RECORD_LIMIT=200 \\
        occurrence-pipeline run
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the pipeline and report flows."""

    model_config = SettingsConfigDict(
        env_prefix="OCCURRENCE_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "occurrence-pipeline"
    app_env: str = "development"
    debug: bool = False

    # Acquisition
    species_name: str = "Danaus plexippus"
    country: str = Field(default="US", min_length=2, max_length=2)
    year_range: str = "2020,2023"
    record_limit: int = Field(default=500, ge=1)

    # Covariate simulation
    seed: int = 123

    # Cleaning
    uncertainty_limit_m: float = Field(default=10000, gt=0)
    join_precision: int = Field(default=4, ge=0)

    # Output
    data_dir: str = "data"
    reports_dir: str = "reports"

    # Batch reports
    region: str = "United States"
    report_species: list[str] = Field(
        default_factory=lambda: ["Danaus plexippus", "Libytheana carinenta"]
    )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (read once)."""
    return Settings()
