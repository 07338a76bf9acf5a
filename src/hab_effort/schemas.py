"""
Domain models for HAB effort.

Bulk processing runs on data frames whose columns carry the occurrence
fields. ``EffortRecord`` is the validated shape of one report row.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EffortRecord(BaseModel):
    """Sampling effort for one region in one year."""

    model_config = ConfigDict(frozen=True)

    hab_region: str
    year: int
    effort: int = Field(..., ge=0, description="Distinct (month, grid cell) pairs observed")
