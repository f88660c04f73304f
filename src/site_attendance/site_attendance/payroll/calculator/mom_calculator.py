from __future__ import annotations

from ...core.constants import DAILY_RATE_HOURS, MOM_HOURS_PER_WEEK, MOM_MONTHS_PER_YEAR, MOM_WEEKS_PER_YEAR
from ...core.enums import RateType
from ...workers.model import Worker
from .base import PayrollCalculator


class MomPayrollCalculator(PayrollCalculator):
    """Hourly-equivalent rate per the MOM formula for monthly-rated workers.

    HOURLY: salary as-is. DAILY: salary / 8. MONTHLY: (12 x salary) / (52 x 44).
    """

    def hourly_rate(self, worker: Worker) -> float:
        salary = float(worker.salary or 0)
        if worker.rate_type == RateType.HOURLY:
            return salary
        if worker.rate_type == RateType.DAILY:
            return salary / DAILY_RATE_HOURS
        return (MOM_MONTHS_PER_YEAR * salary) / (MOM_WEEKS_PER_YEAR * MOM_HOURS_PER_WEEK)
