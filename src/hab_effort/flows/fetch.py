"""
Prefect flow for filling the input caches.

Downloads OBIS occurrences and the HAB region shapefile unless they are
already cached. Nothing is ever refetched while a cache entry exists.

Run locally:
    python -m hab_effort.flows.fetch

Run with Prefect dashboard:
    prefect server start &
    python -m hab_effort.flows.fetch
"""

from __future__ import annotations

from typing import Any

import geopandas as gpd
import pandas as pd
from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from hab_effort.config import get_settings
from hab_effort.datasources import obis, regions
from hab_effort.datasources.regions import RegionDataError
from hab_effort.store import CacheStorage, DataStore

store: CacheStorage = DataStore(get_settings().data_dir)

# Cache keys (relative paths within the store)
OCCURRENCES_KEY = "historical/occurrences.parquet"
REGIONS_KEY = "reference/hab_regions"


@task(name="fetch-occurrences", cache_policy=NO_CACHE)
def fetch_occurrences(taxon_ids: list[int], page_size: int = 10000) -> pd.DataFrame:
    """Fetch phytoplankton occurrences from OBIS."""
    return obis.fetch_occurrences(taxon_ids, page_size=page_size)


@task(name="fetch-regions", cache_policy=NO_CACHE)
def fetch_regions(url: str) -> gpd.GeoDataFrame:
    """Download and validate the HAB region shapefile."""
    return regions.download_regions(url)


@task(name="load-occurrences", cache_policy=NO_CACHE)
def load_occurrences(taxon_ids: list[int] | None = None) -> pd.DataFrame:
    """Return cached occurrences, fetching and caching them on first use."""
    cached = store.load(OCCURRENCES_KEY)
    if cached is not None:
        print(f"Occurrences cached ({len(cached)} records), skipping fetch.")
        return cached

    settings = get_settings()
    taxon_ids = taxon_ids or settings.taxon_ids
    print(f"Fetching OBIS occurrences for taxa {taxon_ids}...")
    frame = fetch_occurrences(taxon_ids, page_size=settings.obis_page_size)
    dropped = frame.attrs.get("dropped", 0)
    if dropped:
        print(f"Dropped {dropped} records without coordinates or date_mid")
    store.store(
        OCCURRENCES_KEY, frame, source="api.obis.org", taxon_ids=taxon_ids, dropped=dropped
    )
    print(f"Cached {len(frame)} occurrences to {OCCURRENCES_KEY}")
    return frame


@task(name="load-regions", cache_policy=NO_CACHE)
def load_regions(url: str | None = None) -> gpd.GeoDataFrame:
    """Return cached region polygons, downloading them on first use."""
    cached = store.load(REGIONS_KEY)
    if cached is not None:
        print(f"Regions cached ({len(cached)} polygons), skipping download.")
        return regions.validate_regions(cached)

    url = url or get_settings().regions_url
    if not url:
        msg = "No HAB regions archive URL configured (set HAB_EFFORT_REGIONS_URL)"
        raise RegionDataError(msg)

    print(f"Downloading HAB regions from {url}...")
    frame = fetch_regions(url)
    store.store(REGIONS_KEY, frame, source=url)
    print(f"Cached {len(frame)} region polygons to {REGIONS_KEY}")
    return frame


@flow(name="fetch-data", log_prints=True)
def fetch_all(taxon_ids: list[int] | None = None, regions_url: str | None = None) -> dict[str, Any]:
    """
    Make sure both inputs are cached.

    Returns:
        Dict with the number of cached occurrences and regions.
    """
    occurrences = load_occurrences(taxon_ids)
    polygons = load_regions(regions_url)
    return {"occurrences": len(occurrences), "regions": len(polygons)}


if __name__ == "__main__":
    result = fetch_all()
    print(f"Flow complete: {result}")
