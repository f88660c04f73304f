from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import LUNCH_DEDUCTION_HOURS, MEAL_SUGGESTION_OT_HOURS, NORMAL_HOURS_THRESHOLD
from ..model import HoursDecision
from .base import ClockOutStrategy


def round_half_up(value: float, places: int = 1) -> float:
    """Round ties away from zero (0.25 -> 0.3), as the hours are shown on screen."""

    return float(Decimal(str(value)).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


class AutoDerivedStrategy(ClockOutStrategy):
    """Elapsed time minus a 1h lunch, split at 8h into normal and overtime.

    Zero or negative elapsed time (clock skew) yields 0/0 with an anomaly note
    instead of an error.
    """

    def __init__(
        self,
        *,
        lunch_hours: float = LUNCH_DEDUCTION_HOURS,
        threshold_hours: float = NORMAL_HOURS_THRESHOLD,
        meal_ot_hours: float = MEAL_SUGGESTION_OT_HOURS,
    ):
        self._lunch = float(lunch_hours)
        self._threshold = float(threshold_hours)
        self._meal_ot = float(meal_ot_hours)

    def decide(self, *, clock_in_time: datetime, now: datetime) -> HoursDecision:
        elapsed = (now - clock_in_time).total_seconds() / 3600
        anomaly = None
        if elapsed <= 0:
            anomaly = f"Non-positive elapsed time ({elapsed:.2f}h), hours set to 0"

        net = max(0.0, elapsed - self._lunch)
        if net > self._threshold:
            normal, ot = self._threshold, net - self._threshold
        else:
            normal, ot = net, 0.0

        return HoursDecision(
            normal_hours=round_half_up(normal),
            overtime_hours=round_half_up(ot),
            elapsed_hours=round(max(elapsed, 0.0), 2),
            lunch_deduction=self._lunch,
            suggest_meal_allowance=ot >= self._meal_ot,
            anomaly=anomaly,
        )
