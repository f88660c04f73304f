from __future__ import annotations

from datetime import date

import pytest

from src.site_attendance.site_attendance.attendance.model import AttendanceRecord
from src.site_attendance.site_attendance.core.enums import RateType
from src.site_attendance.site_attendance.core.exceptions import ValidationError
from src.site_attendance.site_attendance.payroll.service import PayrollService, compute_monthly_summary, month_bounds
from src.site_attendance.site_attendance.workers.model import Worker



def _record(rid, worker_id, day, normal, ot, **kw):
    return AttendanceRecord(id=rid, worker_id=worker_id, date=day, normal_hours=normal, overtime_hours=ot, **kw)


def test_monthly_worker_single_day(workers_repo, holidays):
    records = [_record("A1", "W-001", date(2025, 3, 4), 8.0, 0.0)]

    rows = compute_monthly_summary(workers_repo.list_all(), records, 3, 2025, holidays=holidays)
    rahman = next(r for r in rows if r.worker_id == "W-001")

    assert rahman.hourly_rate == pytest.approx(23.0769, abs=1e-4)
    assert rahman.normal_pay == pytest.approx(184.615, abs=1e-3)
    assert rahman.to_dict()["normalPay"] == 184.62
    assert rahman.total_pay == pytest.approx(rahman.normal_pay)
    assert rahman.days_worked == 1


def test_workers_without_records_get_zero_rows(workers_repo, holidays):
    rows = compute_monthly_summary(workers_repo.list_all(), [], 3, 2025, holidays=holidays)

    assert [r.worker_id for r in rows] == ["W-001", "W-002", "W-003"]
    assert all(r.total_pay == 0 and r.days_worked == 0 for r in rows)


def test_overtime_priced_per_record_day(workers_repo, holidays):
    records = [
        _record("A1", "W-003", date(2025, 12, 23), 8.0, 2.0),  # Tuesday
        _record("A2", "W-003", date(2025, 12, 25), 8.0, 1.0),  # Christmas, Thursday
        _record("A3", "W-003", date(2025, 12, 28), 0.0, 4.0),  # Sunday
    ]

    rows = compute_monthly_summary(workers_repo.list_all(), records, 12, 2025, holidays=holidays)
    kumar = next(r for r in rows if r.worker_id == "W-003")

    assert kumar.ot15_hours == 2.0
    assert kumar.ot20_hours == 5.0
    assert kumar.ot15_pay == pytest.approx(2.0 * 12 * 1.5)
    assert kumar.ot20_pay == pytest.approx(5.0 * 12 * 2.0)
    assert kumar.normal_pay == pytest.approx(16 * 12)
    assert kumar.total_pay == pytest.approx(192 + 36 + 120)
    assert kumar.days_worked == 3


def test_allowances_are_reported_beside_total_pay(workers_repo, holidays):
    records = [
        _record("A1", "W-002", date(2025, 3, 4), 8.0, 2.0, has_meal_allowance=True, transport_claim=10.0),
        _record("A2", "W-002", date(2025, 3, 5), 8.0, 0.0, transport_claim=4.5),
    ]

    rows = compute_monthly_summary(
        workers_repo.list_all(), records, 3, 2025, holidays=holidays, meal_allowance_amount=6.0
    )
    tan = next(r for r in rows if r.worker_id == "W-002")

    assert tan.meal_allowance_count == 1
    assert tan.meal_allowance_total == 6.0
    assert tan.transport_claim_total == 14.5
    assert tan.total_pay == pytest.approx(16 * 20 + 2 * 20 * 1.5)


def test_records_outside_month_are_ignored(workers_repo, holidays):
    records = [
        _record("A1", "W-003", date(2025, 2, 28), 8.0, 0.0),
        _record("A2", "W-003", date(2025, 3, 31), 8.0, 0.0),
        _record("A3", "W-003", date(2025, 4, 1), 8.0, 0.0),
    ]

    rows = compute_monthly_summary(workers_repo.list_all(), records, 3, 2025, holidays=holidays)
    kumar = next(r for r in rows if r.worker_id == "W-003")

    assert kumar.total_normal_hours == 8.0


def test_invalid_month():
    with pytest.raises(ValidationError):
        month_bounds(13, 2025)


def test_month_bounds_february_leap_year():
    assert month_bounds(2, 2024) == (date(2024, 2, 1), date(2024, 2, 29))


def test_service_skips_excluded_workers(workers_repo, ledger_repo, app_context):
    workers_repo.upsert(
        Worker(id="W-009", name="DIRECTOR", rate_type=RateType.MONTHLY, salary=9000, is_excluded_from_payroll=True)
    )
    ledger_repo.append(_record("A1", "W-001", date(2025, 3, 4), 8.0, 0.0))
    service = PayrollService(workers_repo, ledger_repo, app_context)

    ids = [r.worker_id for r in service.monthly_summary(3, 2025)]
    all_ids = [r.worker_id for r in service.monthly_summary(3, 2025, include_excluded=True)]

    assert "W-009" not in ids
    assert "W-009" in all_ids


def test_service_recomputes_after_ledger_changes(workers_repo, ledger_repo, app_context):
    service = PayrollService(workers_repo, ledger_repo, app_context)

    assert service.monthly_summary(3, 2025)[0].total_pay == 0
    ledger_repo.append(_record("A1", "W-001", date(2025, 3, 4), 8.0, 0.0))
    assert service.monthly_summary(3, 2025)[0].total_pay == pytest.approx(184.615, abs=1e-3)


@pytest.mark.parametrize("year", [0, -1, 10000])
def test_month_bounds_rejects_out_of_range_year(year):
    with pytest.raises(ValidationError):
        month_bounds(1, year)
