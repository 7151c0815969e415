"""Turns raw feed records into the flat list the SIEM list import expects.

Steps, in order: drop ``virus``-tagged rows, dedupe on the raw Match value,
repair the two known malformations, optionally add scheme-prefixed variants.
Deduplication happens before repair only, so two raw values that repair to the
same domain both reach the output.
"""
from __future__ import annotations

import re
from typing import Iterable, Sequence

from .records import RawRecord

EXCLUDED_CLASSIFICATION = "virus"
DEFAULT_PREFIXES: tuple[str, ...] = ("http://", "https://")

# Upstream encodes an embedded space as the literal text \032.
ESCAPE_MARKER = "\\032"

_WILDCARD_RE = re.compile(r"^\*\.")
_IP_MARKER_RE = re.compile(r"\d+(?:\.\d+){2,3}" + re.escape(ESCAPE_MARKER))
_MARKER_RE = re.compile(re.escape(ESCAPE_MARKER))


def select_records(records: Iterable[RawRecord], exclude_classification: str = EXCLUDED_CLASSIFICATION) -> list[str]:
    seen: dict[str, None] = {}
    for rec in records:
        if rec.query == exclude_classification:
            continue
        if rec.match not in seen:
            seen[rec.match] = None
    return list(seen)


def repair_domain(value: str) -> str:
    if _WILDCARD_RE.search(value):
        value = _WILDCARD_RE.sub("www.", value)
    if ESCAPE_MARKER in value:
        value = _IP_MARKER_RE.sub("", value)
        value = _MARKER_RE.sub("", value)
    return value


def expand(entry: str, prefixes: Sequence[str] = DEFAULT_PREFIXES) -> list[str]:
    return [entry] + [p + entry for p in prefixes]


def normalize(
    raw_records: Iterable[RawRecord],
    exclude_classification: str = EXCLUDED_CLASSIFICATION,
    do_prepend: bool = False,
    prefixes: Sequence[str] = DEFAULT_PREFIXES,
) -> list[str]:
    out: list[str] = []
    for match in select_records(raw_records, exclude_classification):
        entry = repair_domain(match)
        if do_prepend:
            out.extend(expand(entry, prefixes))
        else:
            out.append(entry)
    return out
