"""Error kinds raised by the feed pipeline. Every one of them ends the run."""
from __future__ import annotations


class FeedError(RuntimeError):
    pass


class FeedResolutionError(FeedError):
    """No listing entry matched the data file name prefix."""


class FeedTransportError(FeedError):
    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class FeedParseError(FeedError):
    pass


class FeedOutputError(FeedError):
    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path
