"""OBIS (Ocean Biodiversity Information System) occurrence data source.

Fetches point occurrences (longitude, latitude, mid-point timestamp) for a
set of taxa from the OBIS v3 API.

Public API:
  - client: Low-level HTTP (cursor-paged occurrence endpoint)
  - occurrences: fetch_occurrences, parse_occurrences, OCCURRENCE_COLUMNS
"""

from hab_effort.datasources.obis.client import API_BASE, OCCURRENCE_URL
from hab_effort.datasources.obis.occurrences import (
    OCCURRENCE_COLUMNS,
    fetch_occurrences,
    parse_occurrences,
)

__all__ = [
    "API_BASE",
    "OCCURRENCE_COLUMNS",
    "OCCURRENCE_URL",
    "fetch_occurrences",
    "parse_occurrences",
]
