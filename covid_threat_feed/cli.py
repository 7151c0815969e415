from __future__ import annotations

import argparse
from typing import Sequence

from .config import (
    DEFAULT_LISTING_URL,
    DEFAULT_NAME_PREFIX,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_TEMP_DIR,
    FeedConfig,
)
from .errors import FeedError, FeedResolutionError
from .fetch import DEFAULT_TIMEOUT_S
from .normalize import EXCLUDED_CLASSIFICATION
from .pipeline import run
from .utils.logging import error, log


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="covid-threat-feed",
        description="Fetch the latest COVID-19 malicious domain feed and write it as a SIEM list-import file.",
    )
    out = p.add_argument_group("Output")
    out.add_argument("--output-dir", type=str, default=DEFAULT_OUTPUT_DIR, help=f"Directory watched by the SIEM list import. Default: {DEFAULT_OUTPUT_DIR}")
    out.add_argument("--output-file", type=str, default=DEFAULT_OUTPUT_FILE, help=f"Output file name (overwritten each run). Default: {DEFAULT_OUTPUT_FILE}")
    out.add_argument("--temp-dir", type=str, default=DEFAULT_TEMP_DIR, help=f"Working directory the list is written to before it is moved into place. Default: {DEFAULT_TEMP_DIR}")
    out.add_argument("--prepend", action="store_true", help="Also emit http:// and https:// variants of every domain.")

    src = p.add_argument_group("Feed source")
    src.add_argument("--listing-url", type=str, default=DEFAULT_LISTING_URL, help="Bucket listing URL; data files are fetched from <listing-url><key>.")
    src.add_argument("--name-prefix", type=str, default=DEFAULT_NAME_PREFIX, help=f"Only consider files whose name starts with this (case-sensitive). Default: {DEFAULT_NAME_PREFIX}")
    src.add_argument("--exclude-query", type=str, default=EXCLUDED_CLASSIFICATION, help=f"Drop rows whose Query column equals this value. Default: {EXCLUDED_CLASSIFICATION}")
    src.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_S, help=f"HTTP timeout in seconds. Default: {DEFAULT_TIMEOUT_S}; 0 sends requests without a timeout, leaving it to the HTTP client.")

    return p.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    config = FeedConfig.from_args(_parse_args(argv))
    try:
        summary = run(config)
    except FeedResolutionError as e:
        error(f"Nothing to download: {e}")
        return 1
    except FeedError as e:
        error(f"{type(e).__name__}: {e}")
        return 1

    log(f"Done: {summary.lines:,} entries from {summary.source_name} -> {summary.output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
