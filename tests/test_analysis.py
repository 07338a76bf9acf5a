"""Tests for the pipeline steps: temporal, spatial join, grid, effort."""

from __future__ import annotations

import geopandas as gpd
import pandas as pd
import pytest
from rhealpixdggs.dggs import WGS84_003, Cell
from shapely.geometry import Polygon, box

from hab_effort.analysis.effort import compute_effort, effort_records
from hab_effort.analysis.grid import GridIndexer
from hab_effort.analysis.spatial_join import join_regions, occurrences_to_points
from hab_effort.analysis.temporal import add_year_month, year_month
from hab_effort.reference.regions import UnknownRegionError
from hab_effort.schemas import EffortRecord

from .conftest import FEB_15_2010, JAN_15_2010, JUN_15_2010, MAR_01_2011

# =============================================================================
# Temporal
# =============================================================================


class TestYearMonth:
    """Epoch milliseconds -> (year, month)."""

    def test_known_instant(self) -> None:
        assert year_month(JUN_15_2010) == (2010, 6)

    def test_epoch(self) -> None:
        assert year_month(0) == (1970, 1)

    def test_last_millisecond_of_year(self) -> None:
        # 2010-01-01T00:00:00Z minus 1 ms
        assert year_month(1262304000000 - 1) == (2009, 12)

    def test_negative_timestamp(self) -> None:
        # 1969-12-31T23:59:59.999Z
        assert year_month(-1) == (1969, 12)

    @pytest.mark.parametrize("ms", [JAN_15_2010, FEB_15_2010, MAR_01_2011, 4102444800000])
    def test_month_in_range(self, ms: int) -> None:
        _, month = year_month(ms)
        assert 1 <= month <= 12


class TestAddYearMonth:
    """Vectorised conversion over a frame."""

    def test_adds_columns(self, occurrences: pd.DataFrame) -> None:
        result = add_year_month(occurrences)
        assert list(result["year"]) == [2010, 2010, 2010, 2011, 2010, 2010]
        assert list(result["month"]) == [1, 1, 2, 3, 6, 6]

    def test_matches_scalar_conversion(self, occurrences: pd.DataFrame) -> None:
        result = add_year_month(occurrences)
        for ms, year, month in zip(result["date_mid"], result["year"], result["month"], strict=True):
            assert year_month(ms) == (year, month)

    def test_does_not_mutate_input(self, occurrences: pd.DataFrame) -> None:
        add_year_month(occurrences)
        assert "year" not in occurrences.columns

    def test_missing_column(self) -> None:
        with pytest.raises(ValueError, match="date_mid"):
            add_year_month(pd.DataFrame({"x": [1]}))

    def test_null_timestamp(self) -> None:
        with pytest.raises(ValueError, match="missing"):
            add_year_month(pd.DataFrame({"date_mid": [JAN_15_2010, None]}))


# =============================================================================
# Spatial join
# =============================================================================


class TestJoinRegions:
    """Point-in-region assignment."""

    def test_assigns_regions(self, occurrences: pd.DataFrame, regions: gpd.GeoDataFrame) -> None:
        result = join_regions(occurrences_to_points(occurrences), regions)
        assert result["region_id"].tolist()[:5] == [5, 5, 5, 5, 6]
        assert pd.isna(result["region_id"].iloc[5])

    def test_every_row_once_in_order(
        self, occurrences: pd.DataFrame, regions: gpd.GeoDataFrame
    ) -> None:
        points = occurrences_to_points(occurrences)
        result = join_regions(points, regions)
        assert len(result) == len(occurrences)
        assert result.index.equals(points.index)
        pd.testing.assert_series_equal(result["date_mid"], occurrences["date_mid"])

    def test_ids_within_known_set(
        self, occurrences: pd.DataFrame, regions: gpd.GeoDataFrame
    ) -> None:
        result = join_regions(occurrences_to_points(occurrences), regions)
        assert set(result["region_id"].dropna()) <= {5, 6}
        assert str(result["region_id"].dtype) == "Int64"

    def test_idempotent(self, occurrences: pd.DataFrame, regions: gpd.GeoDataFrame) -> None:
        points = occurrences_to_points(occurrences)
        first = join_regions(points, regions)
        second = join_regions(points, regions)
        pd.testing.assert_series_equal(first["region_id"], second["region_id"])

    def test_boundary_point_is_inside(self, regions: gpd.GeoDataFrame) -> None:
        frame = pd.DataFrame({"decimalLongitude": [-10.0], "decimalLatitude": [50.0]})
        result = join_regions(occurrences_to_points(frame), regions)
        assert result["region_id"].iloc[0] == 5

    def test_overlap_lowest_id_wins(self) -> None:
        overlapping = gpd.GeoDataFrame(
            {"hab_region": [9, 2]},
            geometry=[box(0, 0, 10, 10), box(5, 0, 15, 10)],
            crs="EPSG:4326",
        )
        frame = pd.DataFrame({"decimalLongitude": [7.0, 1.0], "decimalLatitude": [5.0, 5.0]})
        result = join_regions(occurrences_to_points(frame), overlapping)
        assert result["region_id"].tolist() == [2, 9]

    def test_non_default_index_preserved(self, regions: gpd.GeoDataFrame) -> None:
        frame = pd.DataFrame(
            {"decimalLongitude": [20.0, 0.0], "decimalLatitude": [35.0, 50.0]},
            index=[10, 3],
        )
        result = join_regions(occurrences_to_points(frame), regions)
        assert result.loc[10, "region_id"] == 6
        assert result.loc[3, "region_id"] == 5

    def test_missing_coordinates(self) -> None:
        with pytest.raises(ValueError, match="coordinate"):
            occurrences_to_points(pd.DataFrame({"decimalLongitude": [1.0]}))


# =============================================================================
# Grid
# =============================================================================


class TestGridIndexer:
    """Discrete global grid cell assignment."""

    def test_deterministic(self) -> None:
        grid = GridIndexer()
        assert grid.cell_id(50.0, 0.0) == grid.cell_id(50.0, 0.0)
        assert GridIndexer().cell_id(50.0, 0.0) == grid.cell_id(50.0, 0.0)

    def test_cell_id_format(self) -> None:
        cell = GridIndexer(4).cell_id(35.0, 20.0)
        assert len(cell) == 5
        assert cell[0] in "NOPQRS"
        assert cell[1:].isdigit()

    def test_nearby_points_share_cell(self) -> None:
        grid = GridIndexer()
        cell = grid.cell_id(35.0, 20.0)
        centre = grid.cell_to_polygon(cell).centroid
        assert grid.cell_id(centre.y + 0.001, centre.x + 0.001) == cell

    def test_distant_points_differ(self) -> None:
        grid = GridIndexer()
        assert grid.cell_id(50.0, 0.0) != grid.cell_id(-30.0, 120.0)

    def test_cells_are_equal_area(self) -> None:
        grid = GridIndexer()
        cells = [grid.cell_id(0.0, 0.0), grid.cell_id(35.0, 20.0), grid.cell_id(-30.0, 120.0)]
        suids = [(cell[0], *(int(d) for d in cell[1:])) for cell in cells]
        areas = [Cell(WGS84_003, suid).area(plane=False) for suid in suids]
        assert areas[0] == pytest.approx(areas[1])
        assert areas[0] == pytest.approx(areas[2])

    def test_invalid_resolution(self) -> None:
        with pytest.raises(ValueError, match="resolution"):
            GridIndexer(16)

    def test_assign_cells(self, occurrences: pd.DataFrame) -> None:
        grid = GridIndexer()
        result = grid.assign_cells(occurrences)
        assert result["cell_id"].iloc[0] == grid.cell_id(50.0, 0.0)
        assert result["cell_id"].iloc[0] == result["cell_id"].iloc[3]
        assert result["cell_id"].iloc[4] == grid.cell_id(35.0, 20.0)
        assert "cell_id" not in occurrences.columns

    def test_cell_to_polygon_contains_point(self) -> None:
        grid = GridIndexer()
        cell = grid.cell_id(35.0, 20.0)
        polygon = grid.cell_to_polygon(cell)
        assert isinstance(polygon, Polygon)
        assert polygon.is_valid
        assert grid.cell_id(polygon.centroid.y, polygon.centroid.x) == cell

    def test_cell_to_polygon_rejects_other_resolution(self) -> None:
        other = GridIndexer(5).cell_id(50.0, 0.0)
        with pytest.raises(ValueError, match="resolution-4"):
            GridIndexer(4).cell_to_polygon(other)

    def test_cell_to_polygon_rejects_malformed_id(self) -> None:
        with pytest.raises(ValueError, match="resolution-4"):
            GridIndexer(4).cell_to_polygon("X1234")


# =============================================================================
# Effort
# =============================================================================


def _enriched(rows: list[tuple[int | None, int, int, str]]) -> pd.DataFrame:
    frame = pd.DataFrame(rows, columns=["region_id", "year", "month", "cell_id"])
    frame["region_id"] = frame["region_id"].astype("Int64")
    return frame


class TestComputeEffort:
    """Distinct cell-months per region and year."""

    def test_duplicate_counts_once(self) -> None:
        frame = _enriched([(5, 2010, 1, "A"), (5, 2010, 1, "A"), (5, 2010, 2, "B")])
        result = compute_effort(frame)
        assert result.to_dict("records") == [{"hab_region": "EUR", "year": 2010, "effort": 2}]

    def test_n_duplicates_contribute_one(self) -> None:
        frame = _enriched([(6, 2012, 7, "C")] * 25)
        assert compute_effort(frame)["effort"].tolist() == [1]

    def test_same_cell_different_months(self) -> None:
        frame = _enriched([(5, 2010, m, "A") for m in (1, 2, 3)])
        assert compute_effort(frame)["effort"].tolist() == [3]

    def test_unassigned_excluded(self) -> None:
        frame = _enriched([(None, 2010, 1, "A"), (5, 2010, 1, "B")])
        result = compute_effort(frame)
        assert result["effort"].tolist() == [1]

    def test_groups_sorted_by_region_then_year(self) -> None:
        frame = _enriched(
            [(6, 2011, 1, "A"), (5, 2012, 1, "B"), (6, 2010, 1, "C"), (5, 2010, 1, "D")]
        )
        result = compute_effort(frame)
        assert list(zip(result["hab_region"], result["year"], strict=True)) == [
            ("EUR", 2010),
            ("EUR", 2012),
            ("MED", 2010),
            ("MED", 2011),
        ]

    def test_unknown_region_raises(self) -> None:
        frame = _enriched([(14, 2010, 1, "A")])
        with pytest.raises(UnknownRegionError):
            compute_effort(frame)

    def test_empty_input(self) -> None:
        result = compute_effort(_enriched([(None, 2010, 1, "A")]))
        assert result.empty
        assert list(result.columns) == ["hab_region", "year", "effort"]

    def test_missing_column(self) -> None:
        with pytest.raises(ValueError, match="cell_id"):
            compute_effort(pd.DataFrame({"region_id": [5], "year": [2010], "month": [1]}))


class TestEffortRecords:
    def test_converts_rows(self) -> None:
        frame = _enriched([(5, 2010, 1, "A"), (5, 2010, 2, "B")])
        records = effort_records(compute_effort(frame))
        assert records == [EffortRecord(hab_region="EUR", year=2010, effort=2)]
