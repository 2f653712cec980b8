"""Studio-local time helpers.

Calendar-day rules (All Access usage, end-of-day expiry) are evaluated in the
studio's timezone. Naive datetimes are taken to be studio-local.
"""

from datetime import UTC, datetime, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo

from app.core.config import settings


@lru_cache
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def studio_tz() -> tzinfo:
    return _zone(settings.STUDIO_TIMEZONE)


def as_local(dt: datetime) -> datetime:
    """Convert a datetime to studio-local time."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=studio_tz())
    return dt.astimezone(studio_tz())


def local_now(now: datetime | None = None) -> datetime:
    """Return ``now`` (or the current instant) as a studio-local datetime."""
    return as_local(now if now is not None else datetime.now(UTC))
