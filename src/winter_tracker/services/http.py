"""
HTTP sessions for the tracker.

Two callers, two retry policies:
  - ``session`` (this module) fetches pre-seeded cache files from the
    deployment's static host and retries transient gateway errors.
  - The Meteostat client builds its own session with ``NO_RETRY``; the API
    is rate limited per key, so a failed year degrades to empty data rather
    than burning quota.

Both get a default timeout from ``TimeoutHTTPAdapter`` and identify
themselves with ``USER_AGENT``.
"""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from winter_tracker import __version__

#: Static cache assets: a few retries on gateway errors, backoff 0s, 1s, 2s.
DEFAULT_RETRY = Retry(
    total=3,
    backoff_factor=1,
    status_forcelist=[502, 503, 504],
    allowed_methods=["GET", "HEAD"],
    raise_on_status=False,
)

#: Single attempt, for rate-limited upstream APIs.
NO_RETRY = Retry(total=0, raise_on_status=False)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = f"winter-tracker/{__version__}"


class TimeoutHTTPAdapter(HTTPAdapter):
    """``HTTPAdapter`` that fills in a timeout when the caller gives none."""

    def __init__(self, *args: Any, timeout: float = DEFAULT_TIMEOUT, **kwargs: Any) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """Session with a timeout adapter mounted for http and https.

    Args:
        retry: Retry policy (``DEFAULT_RETRY`` when omitted).
        timeout: Seconds applied to requests that don't pass ``timeout=``.
    """
    s = requests.Session()
    adapter = TimeoutHTTPAdapter(
        max_retries=retry if retry is not None else DEFAULT_RETRY,
        timeout=timeout,
    )
    for prefix in ("https://", "http://"):
        s.mount(prefix, adapter)
    s.headers["User-Agent"] = USER_AGENT
    return s


#: Static cache reads.
session: requests.Session = create_session()
