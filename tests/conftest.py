"""Shared fixtures: small region polygons and occurrence snapshots."""

from __future__ import annotations

from typing import Any

import geopandas as gpd
import pandas as pd
import pytest
from shapely.geometry import box

# Epoch milliseconds (UTC)
JAN_15_2010 = 1263513600000
FEB_15_2010 = 1266192000000
JUN_15_2010 = 1276560000000
MAR_01_2011 = 1298937600000


class MemoryStore:
    """In-memory CacheStorage used in place of the file-backed DataStore."""

    def __init__(self, entries: dict[str, pd.DataFrame] | None = None) -> None:
        self.entries: dict[str, pd.DataFrame] = dict(entries or {})
        self.meta: dict[str, dict[str, Any]] = {}

    def load(self, key: str) -> pd.DataFrame | None:
        frame = self.entries.get(key)
        return None if frame is None else frame.copy()

    def store(self, key: str, data: pd.DataFrame, **meta: Any) -> None:
        self.entries[key] = data.copy()
        self.meta[key] = meta


@pytest.fixture
def regions() -> gpd.GeoDataFrame:
    """EUR (id 5) and MED (id 6) as adjacent boxes."""
    return gpd.GeoDataFrame(
        {"hab_region": [5, 6]},
        geometry=[box(-10, 40, 10, 60), box(10, 30, 30, 40)],
        crs="EPSG:4326",
    )


@pytest.fixture
def occurrences() -> pd.DataFrame:
    """Four EUR records (one exact duplicate), one MED, one outside all regions."""
    return pd.DataFrame(
        {
            "decimalLongitude": [0.0, 0.0, 5.0, 0.0, 20.0, -60.0],
            "decimalLatitude": [50.0, 50.0, 55.0, 50.0, 35.0, 0.0],
            "date_mid": [
                JAN_15_2010,
                JAN_15_2010,
                FEB_15_2010,
                MAR_01_2011,
                JUN_15_2010,
                JUN_15_2010,
            ],
        }
    )
