#!/usr/bin/env python3
from __future__ import annotations

import argparse

from covid_threat_feed.config import DEFAULT_LISTING_URL, DEFAULT_NAME_PREFIX
from covid_threat_feed.fetch import fetch_bytes
from covid_threat_feed.listing import parse_listing, select_latest

def main() -> None:
    ap = argparse.ArgumentParser(description="Show the feed files in the bucket listing, oldest first, and which one a run would pick.")
    ap.add_argument("--listing-url", type=str, default=DEFAULT_LISTING_URL)
    ap.add_argument("--name-prefix", type=str, default=DEFAULT_NAME_PREFIX)
    ap.add_argument("--all", action="store_true", help="Also show entries that do not match --name-prefix")
    args = ap.parse_args()

    entries = parse_listing(fetch_bytes(args.listing_url))
    shown = entries if args.all else [e for e in entries if e.name.startswith(args.name_prefix)]
    for e in sorted(shown, key=lambda e: e.last_modified):
        print(f"{e.last_modified.isoformat()}  {e.name}")

    latest = select_latest(entries, args.name_prefix)
    if latest is None:
        raise SystemExit(f"No file matching '{args.name_prefix}*' at {args.listing_url}")
    print(f"Latest: {latest.name}")

if __name__ == "__main__":
    main()
