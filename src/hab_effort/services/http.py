"""
Shared HTTP client with automatic retry and backoff.

Provides a pre-configured ``requests.Session`` that retries on transient
network errors (timeouts, connection resets, 429/502/503/504) with exponential
backoff, honouring a capped ``Retry-After``.  All data sources should use
this instead of bare ``requests.get``.

Once retries are exhausted the error is raised to the caller: a failed
download aborts the run.

Usage::

    from hab_effort.services.http import session

    resp = session.get("https://api.obis.org/v3/occurrence", params={...})
    resp.raise_for_status()
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from hab_effort import __version__

#: Longest ``Retry-After`` we are willing to sleep for, in seconds.
MAX_RETRY_AFTER = 60.0


class CappedRetry(Retry):
    """``Retry`` that honours ``Retry-After`` but never sleeps past a cap.

    OBIS answers bursts of paging requests with 429/503 and a
    ``Retry-After`` header; a large value there would stall a fetch.
    """

    def parse_retry_after(self, retry_after: str) -> float:
        return min(super().parse_retry_after(retry_after), MAX_RETRY_AFTER)


#: Default retry strategy for transient OBIS and download errors.
DEFAULT_RETRY = CappedRetry(
    total=4,
    backoff_factor=2,  # 0s, 2s, 4s, 8s between retries
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET", "HEAD", "OPTIONS"],
    respect_retry_after_header=True,
    raise_on_status=False,  # let resp.raise_for_status() handle it
)

# OBIS pages of 10k records can be slow to assemble server-side
DEFAULT_TIMEOUT = 120  # seconds


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with retry adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = f"hab-effort/{__version__}"
    s.headers["Accept"] = "application/json"

    # Wrap send to inject a default timeout so callers don't need to pass one.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session, import and use directly.
session: requests.Session = create_session()
