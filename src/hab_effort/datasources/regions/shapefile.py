"""HAB region polygons: download, extract, validate."""

from __future__ import annotations

import io
import tempfile
import zipfile
from pathlib import Path

import geopandas as gpd
import pandas as pd

from hab_effort.reference.regions import REGION_CODES, REGION_ID_COLUMN, UnknownRegionError
from hab_effort.services.http import session

POLYGON_TYPES = frozenset({"Polygon", "MultiPolygon"})


class RegionDataError(ValueError):
    """The region dataset doesn't have the expected columns or geometry."""


def validate_regions(frame: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    """Check a region GeoDataFrame and normalise it.

    Returns a frame with an integer ``hab_region`` column and polygon
    geometries in EPSG:4326.

    Raises:
        RegionDataError: Missing ``hab_region``/geometry, non-integer ids, or
            geometries that are not (multi)polygons.
        UnknownRegionError: Region ids with no entry in ``REGION_CODES``.
    """
    if REGION_ID_COLUMN not in frame.columns:
        msg = f"Region data has no {REGION_ID_COLUMN!r} column (columns: {list(frame.columns)})"
        raise RegionDataError(msg)
    try:
        geometry_column = frame.geometry.name if isinstance(frame, gpd.GeoDataFrame) else None
    except AttributeError:
        geometry_column = None
    if geometry_column is None:
        msg = "Region data has no geometry column"
        raise RegionDataError(msg)

    geom_types = set(frame.geom_type.dropna())
    if frame.geometry.isna().any() or not geom_types <= POLYGON_TYPES:
        msg = f"Region geometries must be polygons, found {sorted(geom_types)}"
        raise RegionDataError(msg)

    msg = f"Region ids in {REGION_ID_COLUMN!r} must be integers"
    try:
        numeric = pd.to_numeric(frame[REGION_ID_COLUMN], errors="raise")
    except (TypeError, ValueError) as exc:
        raise RegionDataError(msg) from exc
    if numeric.isna().any() or not (numeric % 1 == 0).all():
        raise RegionDataError(msg)
    ids = numeric.astype("int64")

    unknown = sorted(int(i) for i in set(ids) - set(REGION_CODES))
    if unknown:
        msg = f"Region data has ids with no region code: {unknown}"
        raise UnknownRegionError(msg)

    result = gpd.GeoDataFrame(
        {REGION_ID_COLUMN: ids.to_numpy()},
        geometry=frame.geometry.to_numpy(),
        crs=frame.crs,
    )
    if result.crs is None:
        result = result.set_crs("EPSG:4326")
    elif result.crs.to_epsg() != 4326:
        result = result.to_crs(epsg=4326)
    return result.reset_index(drop=True)


def read_regions(directory: Path) -> gpd.GeoDataFrame:
    """Read and validate the single shapefile inside ``directory``.

    Raises:
        RegionDataError: If the directory holds no shapefile, or more than one.
    """
    shapefiles = sorted(directory.rglob("*.shp"))
    if len(shapefiles) != 1:
        msg = f"Expected one shapefile in {directory}, found {len(shapefiles)}"
        raise RegionDataError(msg)
    return validate_regions(gpd.read_file(shapefiles[0]))


def download_regions(url: str) -> gpd.GeoDataFrame:
    """
    Download a zipped shapefile of HAB regions and read it.

    The archive is extracted to a temporary directory that is removed once
    the polygons are in memory.

    Raises:
        requests.HTTPError: If the download fails.
        zipfile.BadZipFile: If the response is not a zip archive.
        RegionDataError: If the archive does not contain valid region data.
    """
    resp = session.get(url)
    resp.raise_for_status()

    with tempfile.TemporaryDirectory(prefix="hab_regions_") as tmp:
        with zipfile.ZipFile(io.BytesIO(resp.content)) as archive:
            archive.extractall(tmp)
        return read_regions(Path(tmp))
