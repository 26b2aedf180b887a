from __future__ import annotations

from datetime import datetime, timezone


def as_utc(ts: datetime) -> datetime:
    """SQLite drops tzinfo on the way back; everything stored is UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts
