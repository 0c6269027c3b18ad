"""UTC time helpers."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def utc_now() -> datetime:
    """Return the current UTC time without microseconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def utc_timestamp(dt: datetime | None = None) -> str:
    """Return an ISO 8601 UTC timestamp with a ``Z`` suffix."""
    dt = dt or utc_now()
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def normalize_timestamp(value: Any) -> str | None:
    """Coerce a YAML-parsed timestamp (str or datetime) to a string."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return utc_timestamp(value)
    return str(value)


__all__ = ["utc_now", "utc_timestamp", "normalize_timestamp"]
