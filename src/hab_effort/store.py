"""File-backed cache for pipeline inputs.

Entries are organised into tiers by how often they change:
  - reference/: Static data (HAB region polygons)
  - historical/: Downloaded snapshots (OBIS occurrence records)
  - derived/: Computed outputs, always recomputed

Tabular data is stored as Parquet. Region polygons are stored as a shapefile
set inside a directory named after the key. Every entry gets a sidecar
``.meta.json`` recording where and when it was fetched.

An entry that exists is used as-is: the cache never expires, so re-running
the pipeline never repeats a download. Delete the entry to refetch.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003
from typing import Any, Protocol

import geopandas as gpd
import pandas as pd


class CacheStorage(Protocol):
    """Anything the flows can load cached frames from and store them into."""

    def load(self, key: str) -> pd.DataFrame | None: ...

    def store(self, key: str, data: pd.DataFrame, **meta: Any) -> None: ...


class DataStore:
    """Manages read/write of cached data files under a base directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.reference = base_dir / "reference"
        self.historical = base_dir / "historical"
        self.derived = base_dir / "derived"

    def load(self, key: str) -> pd.DataFrame | None:
        """Load a cached frame.

        Returns a GeoDataFrame for shapefile directories, a DataFrame for
        Parquet files, or None if nothing is cached under ``key``.
        """
        full = self._resolve(Path(key))
        if not full.exists():
            return None
        if full.is_dir():
            shapefiles = sorted(full.glob("*.shp"))
            if not shapefiles:
                return None
            return gpd.read_file(shapefiles[0])
        return pd.read_parquet(full)

    def store(self, key: str, data: pd.DataFrame, **meta: Any) -> None:
        """Write a frame to the cache with sidecar metadata.

        Args:
            key: Relative path under base_dir (e.g. ``historical/occurrences.parquet``
                or ``reference/hab_regions`` for polygons).
            data: Frame to store. GeoDataFrames are written as a shapefile set.
            **meta: Metadata fields (``source``, query params, ...).
        """
        full = self._resolve(Path(key))
        if isinstance(data, gpd.GeoDataFrame):
            full.mkdir(parents=True, exist_ok=True)
            data.to_file(full / f"{full.name}.shp")
        else:
            full.parent.mkdir(parents=True, exist_ok=True)
            data.to_parquet(full, index=False)

        envelope: dict[str, Any] = {"fetched_at": datetime.now(UTC).isoformat(), **meta}
        with self._meta_path(full).open("w") as f:
            json.dump({"meta": envelope}, f, indent=2)

    def read_meta(self, key: str) -> dict[str, Any]:
        """Return the sidecar metadata for ``key`` (empty if none)."""
        sidecar = self._meta_path(self._resolve(Path(key)))
        if not sidecar.exists():
            return {}
        with sidecar.open() as f:
            result: dict[str, Any] = json.load(f)
        return result.get("meta", {})

    def contains(self, key: str) -> bool:
        return self._resolve(Path(key)).exists()

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full

    @staticmethod
    def _meta_path(full: Path) -> Path:
        return full.with_name(full.name + ".meta.json")
