"""Phytoplankton occurrence fetching and parsing."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pandas as pd

from hab_effort.datasources.obis import client

#: Columns of the cached occurrence snapshot, in order.
OCCURRENCE_COLUMNS = ["decimalLongitude", "decimalLatitude", "date_mid"]


def parse_occurrences(records: Iterable[dict[str, Any]]) -> pd.DataFrame:
    """Reduce raw OBIS records to the snapshot columns.

    Records without coordinates or a ``date_mid`` can't be placed in space
    or time and are dropped. The number dropped is kept in
    ``frame.attrs["dropped"]``.

    Returns:
        DataFrame with float coordinates and int64 ``date_mid``.
    """
    frame = pd.DataFrame.from_records(list(records))
    for col in OCCURRENCE_COLUMNS:
        if col not in frame.columns:
            frame[col] = pd.NA

    complete = frame[OCCURRENCE_COLUMNS].dropna()
    result = complete.astype(
        {"decimalLongitude": "float64", "decimalLatitude": "float64", "date_mid": "int64"}
    ).reset_index(drop=True)
    result.attrs["dropped"] = len(frame) - len(complete)
    return result


def fetch_occurrences(
    taxon_ids: Iterable[int],
    *,
    page_size: int = client.MAX_PAGE_SIZE,
) -> pd.DataFrame:
    """
    Fetch all occurrences for the given taxa.

    Args:
        taxon_ids: WoRMS AphiaIDs; descendants are included by OBIS.
        page_size: Records per request (at most 10,000).

    Returns:
        DataFrame with ``decimalLongitude``, ``decimalLatitude``, ``date_mid``.
    """
    params: dict[str, Any] = {
        "taxonid": ",".join(str(t) for t in taxon_ids),
        "fields": ",".join(["id", *OCCURRENCE_COLUMNS]),
    }

    records: list[dict[str, Any]] = []
    for page in client.iter_occurrence_pages(params, page_size=page_size):
        records.extend(page)
    return parse_occurrences(records)
