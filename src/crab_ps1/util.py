from __future__ import annotations
from pathlib import Path


def first_line(path: Path) -> str | None:
    """
    Return the first line of the given file with leading & trailing whitespace
    stripped.  If the file cannot be read as UTF-8 text or has no non-blank
    first line, return `None`.
    """
    try:
        with path.open(encoding="utf-8") as fp:
            line = fp.readline().strip()
    except (OSError, UnicodeDecodeError):
        return None
    return line or None
