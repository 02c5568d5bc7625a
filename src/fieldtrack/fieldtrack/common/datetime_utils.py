from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from ..core.constants import DEFAULT_FOLLOW_UP_HOURS


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse timestamps coming from the store or a datetime-local input.

    Accepts `2024-08-01T10:00:00+00:00`, a trailing `Z` and `2024-08-01T10:00`.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    return datetime.fromisoformat(v)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def default_follow_up_at(now: Optional[datetime] = None) -> datetime:
    now = now or now_utc()
    return now + timedelta(hours=DEFAULT_FOLLOW_UP_HOURS)
