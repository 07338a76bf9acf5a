"""Convert epoch-millisecond timestamps to calendar year and month (UTC)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pandas as pd

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def year_month(timestamp_ms: int) -> tuple[int, int]:
    """Return the (year, month) of an epoch-millisecond timestamp.

    Uses integer arithmetic so large and negative values convert exactly.

    Args:
        timestamp_ms: Milliseconds since 1970-01-01T00:00:00Z.

    Returns:
        Tuple of proleptic Gregorian year and month (1-12).
    """
    instant = EPOCH + timedelta(milliseconds=int(timestamp_ms))
    return instant.year, instant.month


def add_year_month(frame: pd.DataFrame, column: str = "date_mid") -> pd.DataFrame:
    """Return a copy of ``frame`` with integer ``year`` and ``month`` columns.

    Args:
        frame: Occurrence records with an epoch-millisecond ``column``.
        column: Name of the timestamp column.

    Raises:
        ValueError: If ``column`` is missing or has null values.
    """
    if column not in frame.columns:
        msg = f"Occurrence data has no {column!r} column"
        raise ValueError(msg)
    if frame[column].isna().any():
        msg = f"Occurrence data has missing {column!r} values"
        raise ValueError(msg)

    instants = pd.to_datetime(frame[column].astype("int64"), unit="ms", utc=True)
    result = frame.copy()
    result["year"] = instants.dt.year.astype("int64")
    result["month"] = instants.dt.month.astype("int64")
    return result
