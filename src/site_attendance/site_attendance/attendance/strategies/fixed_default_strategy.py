from __future__ import annotations

from datetime import datetime

from ...core.constants import FIXED_DEFAULT_NORMAL_HOURS, LUNCH_DEDUCTION_HOURS
from ..model import HoursDecision
from .base import ClockOutStrategy


class FixedDefaultStrategy(ClockOutStrategy):
    """Propose a flat 8 normal / 0 OT day; the supervisor types the real numbers."""

    def decide(self, *, clock_in_time: datetime, now: datetime) -> HoursDecision:
        elapsed = (now - clock_in_time).total_seconds() / 3600
        return HoursDecision(
            normal_hours=FIXED_DEFAULT_NORMAL_HOURS,
            overtime_hours=0.0,
            elapsed_hours=round(max(elapsed, 0.0), 2),
            lunch_deduction=LUNCH_DEDUCTION_HOURS,
        )
