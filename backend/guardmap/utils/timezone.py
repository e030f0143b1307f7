"""
Timezone utilities.

Timestamps are stored as timezone-naive UTC. The deployment covers a single
city, so display conversion targets one configured zone (Asia/Riyadh).
"""

from datetime import datetime

import pytz

UTC_TZ = pytz.UTC


def utc_now() -> datetime:
    """Current time in UTC, timezone-naive for database storage."""
    return datetime.now(UTC_TZ).replace(tzinfo=None)


def from_utc(utc_dt: datetime, timezone: str = "Asia/Riyadh") -> datetime:
    """Stored UTC timestamp (naive or aware) as an aware datetime in ``timezone``."""
    if utc_dt.tzinfo is None:
        utc_dt = UTC_TZ.localize(utc_dt)
    return utc_dt.astimezone(pytz.timezone(timezone))


def local_isoformat(utc_dt: datetime, timezone: str = "Asia/Riyadh") -> str:
    return from_utc(utc_dt, timezone).isoformat()
