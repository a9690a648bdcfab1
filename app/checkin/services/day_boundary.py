"""
Calendar day resolution.

One definition of "today" for every check-in collection: the calendar
date in the user's profile timezone, or the configured default when the
profile has none or names an unknown zone.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


def resolve_timezone(name: Any, default: str = "UTC") -> ZoneInfo:
    """
    Return the ZoneInfo for ``name``, falling back to ``default``.

    Profile documents are not validated, so anything that is not a
    loadable zone key (wrong type, tzdata directory such as "America")
    falls back as well.
    """
    if isinstance(name, str) and name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            pass
    if name:
        logger.warning(f"Unknown profile timezone {name!r}, using {default}")
    return ZoneInfo(default)


def local_day(
    timezone_name: Any,
    default_timezone: str = "UTC",
    now: Optional[datetime] = None,
) -> date:
    """Calendar date of ``now`` (default: current time) in the given timezone."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(resolve_timezone(timezone_name, default_timezone)).date()


def parse_day(value: Any) -> Optional[date]:
    """
    Read a stored day value.

    Accepts date/datetime objects and YYYY-MM-DD strings (longer ISO
    strings are cut to the date part). Anything else is None.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None
