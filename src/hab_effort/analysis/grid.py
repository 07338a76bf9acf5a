"""Discrete global grid indexing.

Bins point locations into cells of the rHEALPix grid on the WGS84
ellipsoid: an equal-area hierarchical tessellation in which every cell of a
given resolution covers the same area. The resolution is fixed when the
indexer is built and every cell id it hands out belongs to that one
resolution.

Cell ids are strings such as ``"N0482"``: a base cell letter followed by one
digit (0-8) per resolution level.

Resolution guide (cell area):
  3 → ~116,600 km², 4 → ~12,950 km², 5 → ~1,440 km²
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import pandas as pd
from rhealpixdggs.dggs import WGS84_003, Cell
from shapely.geometry import Polygon

from hab_effort.config import DEFAULT_GRID_RESOLUTION

MAX_RESOLUTION = 15

_CELL_ID = re.compile(r"[NOPQRS][0-8]*")


@dataclass(frozen=True)
class GridIndexer:
    """Maps (lat, lon) to cell ids at one fixed resolution."""

    resolution: int = DEFAULT_GRID_RESOLUTION

    def __post_init__(self) -> None:
        if not 0 <= self.resolution <= MAX_RESOLUTION:
            msg = f"Grid resolution must be between 0 and {MAX_RESOLUTION}, got {self.resolution}"
            raise ValueError(msg)

    def cell_id(self, lat: float, lon: float) -> str:
        """Return the id of the cell containing (lat, lon)."""
        cell = WGS84_003.cell_from_point(self.resolution, (lon, lat), plane=False)
        if cell is None:
            msg = f"No grid cell for point ({lat}, {lon})"
            raise ValueError(msg)
        return str(cell)

    def assign_cells(
        self,
        frame: pd.DataFrame,
        lat_column: str = "decimalLatitude",
        lon_column: str = "decimalLongitude",
    ) -> pd.DataFrame:
        """Return a copy of ``frame`` with a ``cell_id`` column.

        Each distinct coordinate pair is indexed once.
        """
        result = frame.copy()
        coords = list(zip(frame[lat_column], frame[lon_column], strict=True))
        cells = {point: self.cell_id(*point) for point in set(coords)}
        result["cell_id"] = [cells[point] for point in coords]
        return result

    def cell_to_polygon(self, cell_id: str) -> Polygon:
        """Return the cell boundary as a shapely Polygon in (lon, lat) order.

        Raises:
            ValueError: If ``cell_id`` is not a cell of this grid's resolution.
        """
        if not _CELL_ID.fullmatch(cell_id) or len(cell_id) != self.resolution + 1:
            msg = f"{cell_id!r} is not a resolution-{self.resolution} cell"
            raise ValueError(msg)
        suid = (cell_id[0], *(int(digit) for digit in cell_id[1:]))
        cell = Cell(WGS84_003, suid)
        return Polygon(cell.vertices(plane=False))
