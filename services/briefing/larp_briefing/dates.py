"""Helpers for parsing the free-form publication dates typed into the sheet."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

import dateparser

__all__ = ["parse_published_at", "published_sort_key", "format_timestamp"]

_LOCAL_DATE_PATTERN = re.compile(
    r"^\s*(\d{1,2})\.\s*(\d{1,2})\.\s*(\d{4})"
    r"(?:\s+(\d{1,2}):(\d{1,2})(?::(\d{1,2}))?)?\s*$"
)

_DATEPARSER_SETTINGS = {
    "DATE_ORDER": "DMY",
    "PREFER_DAY_OF_MONTH": "first",
    "RETURN_AS_TIMEZONE_AWARE": False,
}


def _naive_local(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def _parse_iso(value: str) -> Optional[datetime]:
    candidate = value
    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        return None


def _parse_local(value: str) -> Optional[datetime]:
    match = _LOCAL_DATE_PATTERN.match(value)
    if not match:
        return None
    day, month, year, hour, minute, second = match.groups()
    try:
        return datetime(
            int(year),
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
        )
    except ValueError:
        return None


def parse_published_at(raw: Optional[str]) -> Optional[datetime]:
    """Parse a publication date, returning ``None`` when it cannot be read.

    Accepts ISO-like strings, the ``D.M.YYYY[ H:M[:S]]`` form and, as a
    last resort, anything dateparser understands in Czech or English.
    Results are naive local datetimes so they compare with ``datetime.now()``.
    """
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None

    parsed = _parse_iso(value) or _parse_local(value)
    if parsed is None:
        parsed = dateparser.parse(value, languages=["cs", "en"], settings=_DATEPARSER_SETTINGS)
    if parsed is None:
        return None
    return _naive_local(parsed)


def published_sort_key(raw: Optional[str], now: datetime) -> datetime:
    """Return the datetime used for ordering; unreadable dates count as ``now``."""
    return parse_published_at(raw) or now


def format_timestamp(value: datetime) -> str:
    return value.strftime("%d.%m.%Y %H:%M")
