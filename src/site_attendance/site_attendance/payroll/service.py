from __future__ import annotations

import calendar
from datetime import MAXYEAR, MINYEAR, date
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceLedgerRepository
from ..context import AppContext
from ..core.constants import DEFAULT_MEAL_ALLOWANCE, OT_MULTIPLIER_HOLIDAY
from ..core.exceptions import ValidationError
from ..rules.holidays import HolidayCalendar
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .calculator.base import PayrollCalculator
from .calculator.mom_calculator import MomPayrollCalculator
from .model import PayrollSummary


def month_bounds(month: int, year: int) -> tuple[date, date]:
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"Invalid month: {month}")
    if not MINYEAR <= int(year) <= MAXYEAR:
        raise ValidationError(f"Invalid year: {year}")
    last_day = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)


def compute_monthly_summary(
    workers: Iterable[Worker],
    records: Iterable[AttendanceRecord],
    month: int,
    year: int,
    *,
    holidays: HolidayCalendar,
    calculator: Optional[PayrollCalculator] = None,
    meal_allowance_amount: float = DEFAULT_MEAL_ALLOWANCE,
) -> list[PayrollSummary]:
    """Accrue pay for every worker from the ledger entries dated in ``month``/``year``.

    OT is priced per record: 2.0x on Sundays and public holidays, 1.5x otherwise.
    Workers without records get a zero-filled summary.
    """

    start, end = month_bounds(month, year)
    calculator = calculator or MomPayrollCalculator()

    by_worker: dict[str, list[AttendanceRecord]] = {}
    for r in records:
        if start <= r.date <= end:
            by_worker.setdefault(r.worker_id, []).append(r)

    out: list[PayrollSummary] = []
    for w in workers:
        rate = calculator.hourly_rate(w)
        normal_hours = ot15_hours = ot20_hours = 0.0
        ot15_pay = ot20_pay = transport = 0.0
        meals = 0
        days: set[date] = set()

        for r in by_worker.get(w.id, []):
            normal_hours += r.normal_hours
            multiplier = holidays.overtime_multiplier(r.date)
            if multiplier == OT_MULTIPLIER_HOLIDAY:
                ot20_hours += r.overtime_hours
                ot20_pay += r.overtime_hours * rate * multiplier
            else:
                ot15_hours += r.overtime_hours
                ot15_pay += r.overtime_hours * rate * multiplier
            if r.has_meal_allowance:
                meals += 1
            transport += r.transport_claim
            if r.normal_hours > 0 or r.overtime_hours > 0:
                days.add(r.date)

        out.append(
            PayrollSummary(
                worker_id=w.id,
                worker_name=w.name,
                rate_type=w.rate_type,
                hourly_rate=rate,
                total_normal_hours=normal_hours,
                ot15_hours=ot15_hours,
                ot20_hours=ot20_hours,
                normal_pay=normal_hours * rate,
                ot15_pay=ot15_pay,
                ot20_pay=ot20_pay,
                days_worked=len(days),
                meal_allowance_count=meals,
                meal_allowance_total=meals * float(meal_allowance_amount),
                transport_claim_total=transport,
            )
        )
    return out


class PayrollService:
    """Recomputes summaries on every call; nothing here is cached or stored."""

    def __init__(
        self,
        workers: WorkerRepository,
        ledger: AttendanceLedgerRepository,
        context: AppContext,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._workers = workers
        self._ledger = ledger
        self._context = context
        self._calculator = calculator or MomPayrollCalculator()

    def monthly_summary(self, month: int, year: int, *, include_excluded: bool = False) -> list[PayrollSummary]:
        start, end = month_bounds(month, year)
        settings = self._context.settings
        workers = [w for w in self._workers.list_all() if include_excluded or not w.is_excluded_from_payroll]
        records = self._ledger.list_for_period(start=start, end=end)
        return compute_monthly_summary(
            workers,
            records,
            month,
            year,
            holidays=settings.holidays,
            calculator=self._calculator,
            meal_allowance_amount=settings.meal_allowance_amount,
        )
