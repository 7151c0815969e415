from __future__ import annotations

import csv
import io
from dataclasses import dataclass

from .errors import FeedParseError

QUERY_COLUMN = "Query"
MATCH_COLUMN = "Match"


@dataclass(frozen=True)
class RawRecord:
    query: str
    match: str


def parse_records(payload: str | bytes) -> list[RawRecord]:
    """Reads the downloaded CSV feed. The header must name both the Query and Match columns."""
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise FeedParseError(f"Feed file is not UTF-8 text: {e}") from e
    else:
        payload = payload.lstrip("\ufeff")

    if not payload.strip():
        raise FeedParseError("Feed file is empty")

    reader = csv.DictReader(io.StringIO(payload, newline=""))
    try:
        header = reader.fieldnames or []
        missing = [c for c in (QUERY_COLUMN, MATCH_COLUMN) if c not in header]
        if missing:
            raise FeedParseError(f"Feed file is missing column(s) {', '.join(missing)}; header was {header}")

        records: list[RawRecord] = []
        for row in reader:
            match = row.get(MATCH_COLUMN)
            if not match:
                continue
            records.append(RawRecord(query=row.get(QUERY_COLUMN) or "", match=match))
    except csv.Error as e:
        raise FeedParseError(f"Malformed CSV at line {reader.line_num}: {e}") from e
    return records
