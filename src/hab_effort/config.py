"""Application settings.

Values come from environment variables prefixed ``HAB_EFFORT_`` (or a local
``.env`` file), falling back to the defaults below.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# WoRMS AphiaIDs: Dinophyceae, Bacillariophyceae
DEFAULT_TAXON_IDS = [19542, 148899]

# rHEALPix resolution 4: ~12,950 km2 per cell
DEFAULT_GRID_RESOLUTION = 4


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HAB_EFFORT_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "hab-effort"
    app_env: str = "development"
    debug: bool = False

    data_dir: Path = Path("data")
    report_path: Path = Path("effort.csv")
    plot_path: Path = Path("cells.png")

    taxon_ids: list[int] = Field(default_factory=lambda: list(DEFAULT_TAXON_IDS))
    grid_resolution: int = Field(default=DEFAULT_GRID_RESOLUTION, ge=0, le=15)
    regions_url: str | None = None
    obis_page_size: int = Field(default=10000, gt=0, le=10000)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
