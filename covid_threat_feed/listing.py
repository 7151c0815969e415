"""Latest-file resolution over an S3-style bucket listing.

The listing is a ``ListBucketResult`` document with one ``Contents`` element
per object::

    <Contents>
      <Key>covid_2020-04-01.csv</Key>
      <LastModified>2020-04-01T06:12:44.000Z</LastModified>
    </Contents>

Only one page is read; a truncated listing is reported but not followed.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable

from bs4 import BeautifulSoup

from .errors import FeedParseError
from .fetch import DEFAULT_TIMEOUT_S, fetch_bytes
from .utils.logging import warn


@dataclass(frozen=True)
class ListingEntry:
    name: str
    last_modified: datetime


def _parse_timestamp(value: str) -> datetime:
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    ts = datetime.fromisoformat(v)
    # Naive and aware values must stay comparable.
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def parse_listing(payload: str | bytes) -> list[ListingEntry]:
    soup = BeautifulSoup(payload, "xml")
    root = soup.find()
    if root is None:
        raise FeedParseError("Bucket listing is not an XML document")
    if root.name != "ListBucketResult":
        raise FeedParseError(f"Expected a ListBucketResult document, got <{root.name}>")

    truncated = soup.find("IsTruncated")
    if truncated is not None and truncated.get_text(strip=True).lower() == "true":
        warn("Bucket listing is truncated; only the first page is considered.")

    entries: list[ListingEntry] = []
    for node in soup.find_all("Contents"):
        key = node.find("Key")
        modified = node.find("LastModified")
        if key is None or modified is None:
            warn("Skipping listing entry without Key/LastModified.")
            continue
        name = key.get_text(strip=True)
        try:
            ts = _parse_timestamp(modified.get_text())
        except ValueError:
            warn(f"Skipping {name}: unparseable LastModified {modified.get_text(strip=True)!r}")
            continue
        entries.append(ListingEntry(name=name, last_modified=ts))
    return entries


def select_latest(entries: Iterable[ListingEntry], name_prefix: str) -> ListingEntry | None:
    """Newest entry whose name starts with `name_prefix`; on equal timestamps the later entry wins."""
    best: ListingEntry | None = None
    for entry in entries:
        if not entry.name.startswith(name_prefix):
            continue
        if best is None or entry.last_modified >= best.last_modified:
            best = entry
    return best


def resolve_latest(
    listing_uri: str,
    name_prefix: str,
    *,
    session: Any = None,
    timeout_s: float | None = DEFAULT_TIMEOUT_S,
) -> str | None:
    """Returns the name of the most recently modified matching file, or None if nothing matches."""
    payload = fetch_bytes(listing_uri, session=session, timeout_s=timeout_s)
    latest = select_latest(parse_listing(payload), name_prefix)
    return latest.name if latest else None
