from __future__ import annotations
import shutil
from pathlib import Path
from typing import Iterable

from ..errors import FeedOutputError

def write_lines(path: str | Path, lines: Iterable[str]) -> int:
    """Writes one string per line (UTF-8, no header). Returns the number of lines written."""
    p = Path(path)
    count = 0
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", encoding="utf-8", newline="\n") as f:
            for line in lines:
                f.write(line + "\n")
                count += 1
    except OSError as e:
        raise FeedOutputError(f"Cannot write {p}: {e}", path=str(p)) from e
    return count

def replace_file(src: str | Path, dest: str | Path) -> Path:
    """Deletes any existing `dest`, then moves `src` into its place. A `src` that already is `dest` stays as written."""
    s, d = Path(src), Path(dest)
    try:
        if s.resolve() == d.resolve():
            return d
        d.parent.mkdir(parents=True, exist_ok=True)
        if d.exists():
            d.unlink()
        shutil.move(str(s), str(d))
    except OSError as e:
        raise FeedOutputError(f"Cannot replace {d}: {e}", path=str(d)) from e
    return d
