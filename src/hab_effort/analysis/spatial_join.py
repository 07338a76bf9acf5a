"""Assign occurrence points to HAB regions.

Points are matched to polygons with geopandas' ``sjoin`` using the
``intersects`` predicate, so a point on a region boundary belongs to that
region. The join runs against the polygons' STRtree spatial index.

Regions are expected not to overlap. When they do, a point that intersects
several regions is assigned to the one with the lowest region id.
"""

from __future__ import annotations

import geopandas as gpd
import pandas as pd

from hab_effort.reference.regions import REGION_ID_COLUMN

CRS = "EPSG:4326"


def occurrences_to_points(
    frame: pd.DataFrame,
    lon_column: str = "decimalLongitude",
    lat_column: str = "decimalLatitude",
) -> gpd.GeoDataFrame:
    """Build a point GeoDataFrame (EPSG:4326) from occurrence coordinates."""
    missing = [c for c in (lon_column, lat_column) if c not in frame.columns]
    if missing:
        msg = f"Occurrence data is missing coordinate columns: {missing}"
        raise ValueError(msg)
    return gpd.GeoDataFrame(
        frame,
        geometry=gpd.points_from_xy(frame[lon_column], frame[lat_column]),
        crs=CRS,
    )


def join_regions(points: gpd.GeoDataFrame, regions: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    """Add a nullable ``region_id`` column to ``points``.

    Every input row appears exactly once in the output, in the original
    order. ``region_id`` is <NA> for points outside all regions.

    Args:
        points: Occurrence points (see ``occurrences_to_points``).
        regions: Region polygons with a ``hab_region`` id column.

    Returns:
        Copy of ``points`` with an ``Int64`` ``region_id`` column.
    """
    polygons = regions[[REGION_ID_COLUMN, "geometry"]]
    if polygons.crs is None:
        polygons = polygons.set_crs(CRS)
    elif points.crs is not None and polygons.crs != points.crs:
        polygons = polygons.to_crs(points.crs)

    # sjoin needs a unique left index to collapse multi-matches afterwards
    left = points.reset_index(drop=True)
    joined = gpd.sjoin(left, polygons, how="left", predicate="intersects")

    # Lowest region id wins; unmatched rows (NaN) sort last and survive untouched
    joined = joined.sort_values(REGION_ID_COLUMN, kind="stable", na_position="last")
    joined = joined[~joined.index.duplicated(keep="first")].sort_index()

    result = points.copy()
    result["region_id"] = pd.array(joined[REGION_ID_COLUMN].to_numpy(), dtype="Int64")
    return result
