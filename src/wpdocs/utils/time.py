"""Date helpers for the compact ``YYYYMMDD`` values stored in postmeta."""

import re
from datetime import datetime, time, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "Europe/Rome"

# Publication dates stored as YYYYMMDD are shown at a fixed time of day.
PUBLICATION_TIME = time(9, 30, 0)

_SHORT_DATE_RE = re.compile(r"^\d{8}$")


def site_timezone(name: Optional[str] = None) -> tzinfo:
    """Resolve a timezone name, defaulting to the site timezone."""
    return ZoneInfo(name or DEFAULT_TIMEZONE)


def short_date_format(timestamp: int, tz: tzinfo) -> str:
    """
    Convert a Unix timestamp to the compact ``YYYYMMDD`` form.

    Hour information is discarded; the day is the one the timestamp falls
    on in ``tz``.

    Example:
        >>> short_date_format(1331803800, ZoneInfo("Europe/Rome"))
        '20120315'
    """
    return datetime.fromtimestamp(int(timestamp), tz=tz).strftime("%Y%m%d")


def parse_publication_date(value: Optional[str], tz: tzinfo) -> Optional[datetime]:
    """
    Parse a ``data_pubblicazione`` value into a datetime at 09:30 local time.

    Returns None for anything that is not an 8-digit calendar date.
    """
    if not value:
        return None
    value = str(value).strip()
    if not _SHORT_DATE_RE.match(value):
        return None
    try:
        day = datetime.strptime(value, "%Y%m%d").date()
    except ValueError:
        return None
    return datetime.combine(day, PUBLICATION_TIME, tzinfo=tz)


def as_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive ``*_gmt`` column values coming from the store."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
