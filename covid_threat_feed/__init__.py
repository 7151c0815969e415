"""Fetch the latest COVID-19 malicious domain feed and flatten it for SIEM list import."""

from .config import FeedConfig
from .errors import FeedError, FeedOutputError, FeedParseError, FeedResolutionError, FeedTransportError
from .listing import ListingEntry, resolve_latest, select_latest
from .normalize import normalize, repair_domain
from .pipeline import RunSummary, run

__all__ = [
    "FeedConfig",
    "FeedError",
    "FeedOutputError",
    "FeedParseError",
    "FeedResolutionError",
    "FeedTransportError",
    "ListingEntry",
    "RunSummary",
    "normalize",
    "repair_domain",
    "resolve_latest",
    "run",
    "select_latest",
]
