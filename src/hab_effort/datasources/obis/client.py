"""Low-level OBIS API access: URLs, paging."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from hab_effort.services.http import session

API_BASE = "https://api.obis.org/v3"
OCCURRENCE_URL = f"{API_BASE}/occurrence"

#: Largest page the occurrence endpoint will return.
MAX_PAGE_SIZE = 10000


def iter_occurrence_pages(
    params: dict[str, Any],
    page_size: int = MAX_PAGE_SIZE,
) -> Iterator[list[dict[str, Any]]]:
    """Yield pages of raw occurrence records.

    Pages are chained with the ``after`` cursor: each request asks for records
    whose id sorts after the last id of the previous page. Iteration stops at
    the first short or empty page. ``params`` must request the ``id`` field.

    Raises:
        requests.HTTPError: If any page request fails.
    """
    after: str | None = None
    while True:
        query = {**params, "size": min(page_size, MAX_PAGE_SIZE)}
        if after is not None:
            query["after"] = after

        resp = session.get(OCCURRENCE_URL, params=query)
        resp.raise_for_status()
        results: list[dict[str, Any]] = resp.json().get("results", [])
        if not results:
            return

        yield results

        if len(results) < query["size"]:
            return
        after = results[-1]["id"]
