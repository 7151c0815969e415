"""One run of the feed: listing -> selection -> download -> parse -> normalize -> write."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests

from .config import FeedConfig
from .errors import FeedResolutionError
from .fetch import fetch_bytes
from .listing import resolve_latest
from .normalize import normalize
from .records import parse_records
from .utils.io import replace_file, write_lines
from .utils.logging import log


@dataclass
class RunSummary:
    source_name: str
    records: int
    lines: int
    output_path: Path


def _run(config: FeedConfig, session: Any) -> RunSummary:
    log(f"Resolving latest '{config.name_prefix}*' file from {config.listing_url}")
    name = resolve_latest(config.listing_url, config.name_prefix, session=session, timeout_s=config.timeout_s)
    if name is None:
        raise FeedResolutionError(f"No file matching '{config.name_prefix}*' found at {config.listing_url}")
    log(f"Latest file: {name}")

    url = config.data_url(name)
    payload = fetch_bytes(url, session=session, timeout_s=config.timeout_s)
    records = parse_records(payload)
    log(f"Downloaded {url} ({len(records)} records).")

    lines = normalize(
        records,
        exclude_classification=config.exclude_classification,
        do_prepend=config.prepend,
        prefixes=config.prefixes,
    )

    written = write_lines(config.work_path, lines)
    dest = replace_file(config.work_path, config.output_path)
    log(f"Wrote {written:,} lines to {dest}")
    return RunSummary(source_name=name, records=len(records), lines=written, output_path=dest)


def run(config: FeedConfig, *, session: Any = None) -> RunSummary:
    if session is not None:
        return _run(config, session)
    with requests.Session() as s:
        return _run(config, s)
