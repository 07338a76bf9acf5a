"""
Prefect flow for computing the effort report from cached inputs.

Pipeline: occurrences → year/month → region (spatial join) → grid cell
→ distinct cell-months per region/year → effort.csv

Run locally:
    python -m hab_effort.flows.build
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import geopandas as gpd
import pandas as pd
from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from hab_effort.analysis.effort import compute_effort
from hab_effort.analysis.grid import GridIndexer
from hab_effort.analysis.spatial_join import join_regions, occurrences_to_points
from hab_effort.analysis.temporal import add_year_month
from hab_effort.config import get_settings
from hab_effort.flows.fetch import load_occurrences, load_regions
from hab_effort.renderers.cells_map import build_cells_figure, save_figure
from hab_effort.renderers.report import write_effort_csv

# =============================================================================
# Pipeline tasks
# =============================================================================


@task(name="normalize-time", cache_policy=NO_CACHE)
def normalize_time(occurrences: pd.DataFrame) -> pd.DataFrame:
    """Add calendar year and month from ``date_mid``."""
    return add_year_month(occurrences)


@task(name="join-regions", cache_policy=NO_CACHE)
def assign_regions(occurrences: pd.DataFrame, regions: gpd.GeoDataFrame) -> pd.DataFrame:
    """Attach the containing HAB region to each occurrence."""
    joined = join_regions(occurrences_to_points(occurrences), regions)
    return pd.DataFrame(joined.drop(columns="geometry"))


@task(name="assign-cells", cache_policy=NO_CACHE)
def assign_cells(occurrences: pd.DataFrame, grid: GridIndexer) -> pd.DataFrame:
    """Attach the grid cell of each occurrence."""
    return grid.assign_cells(occurrences)


@task(name="aggregate-effort", cache_policy=NO_CACHE)
def aggregate_effort(occurrences: pd.DataFrame) -> pd.DataFrame:
    """Count distinct cell-months per region and year."""
    return compute_effort(occurrences)


@task(name="write-report", cache_policy=NO_CACHE)
def write_report(effort: pd.DataFrame, path: Path) -> Path:
    """Write effort.csv."""
    return write_effort_csv(effort, path)


@task(name="enrich-occurrences", cache_policy=NO_CACHE)
def enrich_occurrences(
    occurrences: pd.DataFrame,
    regions: gpd.GeoDataFrame,
    grid: GridIndexer,
) -> pd.DataFrame:
    """Run the per-occurrence steps: time, region, grid cell."""
    timed = normalize_time(occurrences)
    located = assign_regions(timed, regions)
    return assign_cells(located, grid)


# =============================================================================
# Flows
# =============================================================================


@flow(name="build-effort", log_prints=True)
def build_effort(output: Path | None = None, resolution: int | None = None) -> dict[str, Any]:
    """
    Compute sampling effort and write the report.

    Loads occurrences and regions from the cache (fetching them if missing),
    enriches each occurrence, aggregates and writes ``effort.csv``.
    """
    settings = get_settings()
    output = output or settings.report_path
    grid = GridIndexer(resolution if resolution is not None else settings.grid_resolution)

    print("Loading occurrences and regions...")
    occurrences = load_occurrences()
    regions = load_regions()

    print(f"Enriching {len(occurrences)} occurrences (grid resolution {grid.resolution})...")
    enriched = enrich_occurrences(occurrences, regions, grid)
    matched = int(enriched["region_id"].notna().sum())
    print(f"{matched} of {len(enriched)} occurrences fall inside a HAB region")

    print("Aggregating effort...")
    effort = aggregate_effort(enriched)

    report_path = write_report(effort, output)
    print(f"Report written: {report_path} ({len(effort)} rows)")
    return {
        "occurrences": len(enriched),
        "matched": matched,
        "rows": len(effort),
        "output": str(report_path),
    }


@flow(name="plot-cells", log_prints=True)
def plot_cells(region: str, year: int, output: Path | None = None) -> dict[str, Any]:
    """Render the grid cells sampled in one region/year, one panel per month."""
    settings = get_settings()
    output = output or settings.plot_path
    grid = GridIndexer(settings.grid_resolution)

    occurrences = load_occurrences()
    regions = load_regions()
    enriched = enrich_occurrences(occurrences, regions, grid)

    fig = build_cells_figure(enriched, regions, region, year, grid)
    path = save_figure(fig, output)
    print(f"Plot written: {path}")
    return {"region": region.upper(), "year": year, "output": str(path)}


if __name__ == "__main__":
    result = build_effort()
    print(f"Flow complete: {result}")
