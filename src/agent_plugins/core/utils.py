"""Path display and timestamp helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path


def short_path(p: Path, home: Path) -> str:
    """Return path relative to *home*, using ~ prefix."""
    try:
        rel = p.relative_to(home)
        return f"~/{rel}" if str(rel) != "." else "~"
    except ValueError:
        return str(p)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
