from __future__ import annotations

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code: int, content: bytes) -> None:
        self.status_code = status_code
        self.content = content
        self.text = content.decode("utf-8", errors="replace")


class FakeSession:
    """Serves canned bodies by URL; unknown URLs fail like a refused connection."""

    def __init__(self, routes: dict[str, tuple[int, bytes]]) -> None:
        self.routes = routes
        self.calls: list[str] = []

    def get(self, url: str, timeout=None) -> FakeResponse:
        self.calls.append(url)
        if url not in self.routes:
            raise requests.ConnectionError(f"connection refused: {url}")
        status, body = self.routes[url]
        return FakeResponse(status, body)


@pytest.fixture
def fake_session():
    return FakeSession


def listing_xml(*entries: tuple[str, str], truncated: bool = False) -> bytes:
    contents = "".join(
        f"<Contents><Key>{name}</Key><LastModified>{ts}</LastModified><Size>1024</Size></Contents>"
        for name, ts in entries
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<ListBucketResult xmlns="http://s3.amazonaws.com/doc/2006-03-01/">'
        f"<Name>covid-19-threat-list</Name><IsTruncated>{'true' if truncated else 'false'}</IsTruncated>"
        f"{contents}</ListBucketResult>"
    ).encode("utf-8")


@pytest.fixture
def make_listing():
    return listing_xml
