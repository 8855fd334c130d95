"""UTC timestamps as Drive reports and expects them."""

from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def parse_rfc3339(value: str) -> datetime:
    """
    Parse a Drive `modifiedTime`/`createdTime` value into an aware UTC datetime.

    Raises:
        ValueError: if `value` is empty or not RFC 3339.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError("RFC3339 value must be a non-empty string")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        raise ValueError(f"RFC3339 value has no offset: {value!r}")
    return parsed.astimezone(timezone.utc)


def to_rfc3339(dt: datetime) -> str:
    """Format an aware datetime as a Drive query literal (UTC, microseconds, `Z`)."""
    if dt.tzinfo is None:
        raise ValueError("naive datetime is not allowed; timezone-aware required")
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
