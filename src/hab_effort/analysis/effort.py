"""Aggregate enriched occurrences into sampling effort per region and year.

Effort counts distinct (month, grid cell) pairs: a cell sampled many times
in one month contributes one unit, a cell sampled in three different months
contributes three.
"""

from __future__ import annotations

import pandas as pd

from hab_effort.reference.regions import REGION_ID_COLUMN, region_code
from hab_effort.schemas import EffortRecord

REQUIRED_COLUMNS = ("region_id", "year", "month", "cell_id")
REPORT_COLUMNS = [REGION_ID_COLUMN, "year", "effort"]


def compute_effort(frame: pd.DataFrame) -> pd.DataFrame:
    """Count distinct (month, cell) pairs per (region, year).

    Steps:
      1. Drop occurrences without a region.
      2. Reduce to distinct (region, year, month, cell) tuples.
      3. Count tuples per (region, year).

    Args:
        frame: Occurrences with ``region_id``, ``year``, ``month`` and
            ``cell_id`` columns.

    Returns:
        DataFrame with ``hab_region`` (code), ``year`` and ``effort`` columns,
        sorted by region id then year.

    Raises:
        ValueError: If a required column is missing.
        UnknownRegionError: If a region id has no code.
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        msg = f"Cannot compute effort, missing columns: {missing}"
        raise ValueError(msg)

    assigned = frame.loc[frame["region_id"].notna(), list(REQUIRED_COLUMNS)]
    distinct = assigned.drop_duplicates()
    if distinct.empty:
        return pd.DataFrame(columns=REPORT_COLUMNS).astype({"year": "int64", "effort": "int64"})

    counts = (
        distinct.astype({"region_id": "int64", "year": "int64"})
        .groupby(["region_id", "year"], sort=True)
        .size()
        .reset_index(name="effort")
    )
    counts[REGION_ID_COLUMN] = [region_code(rid) for rid in counts["region_id"]]
    counts["effort"] = counts["effort"].astype("int64")
    return counts[REPORT_COLUMNS].reset_index(drop=True)


def effort_records(effort: pd.DataFrame) -> list[EffortRecord]:
    """Convert an effort frame into immutable records."""
    return [
        EffortRecord(hab_region=row.hab_region, year=int(row.year), effort=int(row.effort))
        for row in effort.itertuples(index=False)
    ]
