"""Date resolution for source documents."""

from __future__ import annotations

import re
from datetime import date, datetime, tzinfo
from typing import Final

from dateutil import parser as date_parser

FILENAME_PATTERN: Final = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})-(?P<slug>.+)$")
_DATE_ONLY: Final = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date_string(token: str) -> date | datetime:
    """Parse a front matter date string.

    ``YYYY-MM-DD`` stays a plain date; anything else goes through dateutil
    (``2015-02-13 10:30:00 +0100`` and ISO 8601 included).

    Raises:
        ValueError: If the string is not a recognizable date.

    """
    normalized = token.strip()
    if not normalized:
        msg = "empty date"
        raise ValueError(msg)

    if _DATE_ONLY.match(normalized):
        return date.fromisoformat(normalized)

    try:
        return date_parser.parse(normalized)
    except (ValueError, OverflowError) as exc:
        msg = f"unrecognized date {token!r}"
        raise ValueError(msg) from exc


def split_filename(stem: str) -> tuple[date | None, str]:
    """Split a ``YYYY-MM-DD-slug`` stem into its date and slug.

    Stems without a date prefix return ``(None, stem)``. A prefix that looks
    like a date but is not a real one (``2015-13-40``) also yields ``None``.
    """
    match = FILENAME_PATTERN.match(stem)
    if match is None:
        return None, stem

    try:
        parsed = date(int(match["year"]), int(match["month"]), int(match["day"]))
    except ValueError:
        return None, match["slug"]
    return parsed, match["slug"]


def to_aware_datetime(value: date | datetime, tz: tzinfo) -> datetime:
    """Promote a date or naive datetime to an aware datetime in ``tz``."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=tz)
        return value
    return datetime(value.year, value.month, value.day, tzinfo=tz)
