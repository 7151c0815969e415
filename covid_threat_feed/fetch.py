from __future__ import annotations

from typing import Any

import requests

from .errors import FeedTransportError

DEFAULT_TIMEOUT_S = 60


def fetch_bytes(url: str, *, session: Any = None, timeout_s: float | None = DEFAULT_TIMEOUT_S) -> bytes:
    """GET `url` and return the body. Any request failure or HTTP status >= 400 raises FeedTransportError."""
    getter = session if session is not None else requests
    try:
        resp = getter.get(url, timeout=timeout_s)
    except requests.RequestException as e:
        raise FeedTransportError(f"GET {url} failed: {e}", url=url) from e

    if resp.status_code >= 400:
        raise FeedTransportError(
            f"GET {url} returned HTTP {resp.status_code}: {resp.text[:200]}",
            url=url,
            status_code=resp.status_code,
        )
    return resp.content
