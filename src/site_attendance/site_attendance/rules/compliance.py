from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from ..common.datetime_utils import now_utc
from ..core.constants import EXPIRY_WARNING_DAYS


def _remaining(expiry: date, now: Optional[datetime]) -> timedelta:
    now = now or now_utc()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return datetime.combine(expiry, time.min, tzinfo=timezone.utc) - now


def days_left(expiry: Optional[date], now: Optional[datetime] = None) -> int:
    """Whole days until ``expiry`` (rounded up), never below 0."""
    if expiry is None:
        return 0
    seconds = _remaining(expiry, now).total_seconds()
    return max(0, math.ceil(seconds / 86400))


def is_expiring_soon(expiry: Optional[date], now: Optional[datetime] = None) -> bool:
    """True when less than 60 days remain; an expired pass counts as expiring."""
    if expiry is None:
        return False
    return _remaining(expiry, now) < timedelta(days=EXPIRY_WARNING_DAYS)
