"""Write the effort report as CSV."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from hab_effort.analysis.effort import REPORT_COLUMNS, effort_records

if TYPE_CHECKING:
    from pathlib import Path


def write_effort_csv(effort: pd.DataFrame, path: Path) -> Path:
    """Write ``hab_region,year,effort`` rows with a header.

    Every row is validated as an ``EffortRecord`` first, so a malformed
    frame fails before anything is written. Row order is taken from
    ``effort`` as-is, so identical input frames give byte-identical files.

    Returns:
        The path written.

    Raises:
        pydantic.ValidationError: If a row is not a valid effort record.
    """
    rows = [record.model_dump() for record in effort_records(effort)]
    path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(rows, columns=REPORT_COLUMNS).to_csv(path, index=False, lineterminator="\n")
    return path
