from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path

from .fetch import DEFAULT_TIMEOUT_S
from .normalize import DEFAULT_PREFIXES, EXCLUDED_CLASSIFICATION

DEFAULT_LISTING_URL = "https://covid-19-threat-list.s3.amazonaws.com/"
DEFAULT_NAME_PREFIX = "covid_"
DEFAULT_OUTPUT_DIR = "list_import"
DEFAULT_OUTPUT_FILE = "covid19_domains.txt"
DEFAULT_TEMP_DIR = ".covid_feed_tmp"


@dataclass(frozen=True)
class FeedConfig:
    """Resolved settings for one run. Built once, before any network or file work."""

    listing_url: str = DEFAULT_LISTING_URL
    name_prefix: str = DEFAULT_NAME_PREFIX
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    output_file: str = DEFAULT_OUTPUT_FILE
    temp_dir: Path = Path(DEFAULT_TEMP_DIR)
    prepend: bool = False
    exclude_classification: str = EXCLUDED_CLASSIFICATION
    prefixes: tuple[str, ...] = DEFAULT_PREFIXES
    timeout_s: float | None = DEFAULT_TIMEOUT_S

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.output_file

    @property
    def work_path(self) -> Path:
        return self.temp_dir / self.output_file

    def data_url(self, name: str) -> str:
        return self.listing_url + name

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "FeedConfig":
        timeout = args.timeout if args.timeout and args.timeout > 0 else None
        return cls(
            listing_url=args.listing_url,
            name_prefix=args.name_prefix,
            output_dir=Path(args.output_dir),
            output_file=args.output_file,
            temp_dir=Path(args.temp_dir),
            prepend=bool(args.prepend),
            exclude_classification=args.exclude_query,
            timeout_s=timeout,
        )
