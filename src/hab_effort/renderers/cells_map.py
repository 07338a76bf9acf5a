"""Grid-cell map of sampling effort for one region and year.

Draws the (simplified) region boundary with the outlines of every grid cell
that has at least one occurrence, one panel per year-month.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import geopandas as gpd
import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from hab_effort.reference.regions import REGION_ID_COLUMN, region_id  # noqa: E402

if TYPE_CHECKING:
    from pathlib import Path

    import pandas as pd
    from matplotlib.figure import Figure

    from hab_effort.analysis.grid import GridIndexer

PANEL_COLUMNS = 4
PANEL_SIZE = (4.0, 3.0)


def build_cells_figure(
    occurrences: pd.DataFrame,
    regions: gpd.GeoDataFrame,
    region: str,
    year: int,
    grid: GridIndexer,
    tolerance: float = 0.1,
) -> Figure:
    """Plot grid cells sampled in ``region`` during ``year``, faceted by month.

    Args:
        occurrences: Enriched occurrences (``region_id``, ``year``, ``month``,
            ``cell_id``).
        regions: Validated region polygons.
        region: Region code, e.g. ``"EUR"``.
        year: Calendar year to plot.
        grid: Indexer that produced ``cell_id``; resolves ids to polygons.
        tolerance: Boundary simplification tolerance in degrees.

    Raises:
        UnknownRegionError: If ``region`` is not a known code.
        ValueError: If no occurrences match the region and year.
    """
    rid = region_id(region)
    mask = (occurrences["region_id"] == rid) & (occurrences["year"] == year)
    cells = occurrences.loc[mask.fillna(False), ["month", "cell_id"]].drop_duplicates()
    if cells.empty:
        msg = f"No occurrences in {region} during {year}"
        raise ValueError(msg)

    boundary = regions.loc[regions[REGION_ID_COLUMN] == rid].geometry.simplify(
        tolerance, preserve_topology=True
    )

    months = sorted(cells["month"].unique())
    ncols = min(PANEL_COLUMNS, len(months))
    nrows = math.ceil(len(months) / ncols)
    fig, axes = plt.subplots(
        nrows,
        ncols,
        figsize=(PANEL_SIZE[0] * ncols, PANEL_SIZE[1] * nrows),
        squeeze=False,
    )

    for ax, month in zip(axes.flat, months, strict=False):
        month_cells = cells.loc[cells["month"] == month, "cell_id"]
        polygons = gpd.GeoSeries([grid.cell_to_polygon(c) for c in month_cells], crs="EPSG:4326")
        boundary.plot(ax=ax, color="#e0e0e0", edgecolor="#888888", linewidth=0.5)
        polygons.boundary.plot(ax=ax, color="#d62728", linewidth=0.6)
        ax.set_title(f"{year}-{month:02d} ({len(month_cells)} cells)", fontsize=9)
        ax.set_axis_off()

    for ax in list(axes.flat)[len(months) :]:
        ax.remove()

    fig.suptitle(f"Sampled grid cells, {region} {year}")
    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: Path) -> Path:
    """Write ``fig`` as PNG and release it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return path
