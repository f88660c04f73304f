from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.site_attendance.site_attendance.attendance.model import ActiveClockIn
from src.site_attendance.site_attendance.attendance.service import ClockService
from src.site_attendance.site_attendance.attendance.strategies.fixed_default_strategy import FixedDefaultStrategy
from src.site_attendance.site_attendance.core.exceptions import ConflictError, ValidationError

T0 = datetime(2025, 3, 4, 8, 0, tzinfo=timezone.utc)


def test_clock_out_when_idle_is_a_noop(clock_service, presence_repo, ledger_repo):
    assert clock_service.start_clock_out("W-001", now=T0) is None
    assert clock_service.clock_out("W-001", now=T0) is None
    assert presence_repo.list_all() == []
    assert ledger_repo.list_all() == []


def test_clock_in_twice_keeps_one_presence_entry(clock_service, presence_repo):
    clock_service.clock_in("W-001", "P-001", now=T0)
    second = clock_service.clock_in("W-001", "P-002", now=T0 + timedelta(minutes=5))

    entries = presence_repo.list_all()
    assert len(entries) == 1
    assert entries[0].project_id == "P-002"
    assert entries[0].clock_in_time == T0 + timedelta(minutes=5)
    assert second.version == 2
    assert clock_service.is_present("W-001")


def test_clock_in_requires_site(clock_service, presence_repo):
    with pytest.raises(ValidationError, match="Site selection"):
        clock_service.clock_in("W-001", "", now=T0)
    assert presence_repo.list_all() == []


def test_clock_in_unknown_worker_is_rejected(clock_service):
    with pytest.raises(ValidationError):
        clock_service.clock_in("W-999", "P-001", now=T0)


def test_nine_and_a_half_hours_split_into_normal_and_overtime(clock_service):
    clock_service.clock_in("W-001", "P-001", now=T0)
    draft = clock_service.start_clock_out("W-001", now=T0 + timedelta(hours=9.5))

    assert draft.normal_hours == 8.0
    assert draft.overtime_hours == 0.5
    assert draft.lunch_deduction == 1.0
    assert draft.has_meal_allowance is False


def test_half_hour_shift_yields_zero_hours(clock_service):
    clock_service.clock_in("W-001", "P-001", now=T0)
    draft = clock_service.start_clock_out("W-001", now=T0 + timedelta(minutes=30))

    assert (draft.normal_hours, draft.overtime_hours) == (0.0, 0.0)
    assert draft.anomaly is None


def test_long_shift_suggests_meal_allowance(clock_service):
    clock_service.clock_in("W-001", "P-001", now=T0)
    draft = clock_service.start_clock_out("W-001", now=T0 + timedelta(hours=11))

    assert draft.overtime_hours == 2.0
    assert draft.has_meal_allowance is True


def test_full_cycle_records_one_entry_and_clears_presence(clock_service, presence_repo, ledger_repo):
    clock_service.clock_in("W-001", "P-001", now=T0)
    record = clock_service.clock_out("W-001", now=T0 + timedelta(hours=9))

    assert record is not None
    assert ledger_repo.list_all() == [record]
    assert record.normal_hours == 8.0
    assert record.overtime_hours == 0.0
    assert record.project_id == "P-001"
    assert record.date == date(2025, 3, 4)
    assert presence_repo.get("W-001") is None


def test_negative_elapsed_time_is_clamped_and_noted(clock_service, ledger_repo, caplog):
    clock_service.clock_in("W-001", "P-001", now=T0)

    with caplog.at_level("WARNING"):
        record = clock_service.clock_out("W-001", now=T0 - timedelta(minutes=10))

    assert (record.normal_hours, record.overtime_hours) == (0.0, 0.0)
    assert "Non-positive elapsed time" in record.remarks
    assert "Non-positive elapsed time" in caplog.text


def test_overrides_replace_proposed_values(clock_service):
    clock_service.clock_in("W-001", "P-001", now=T0)
    record = clock_service.clock_out(
        "W-001",
        now=T0 + timedelta(hours=9),
        overrides={"normalHours": 7.5, "otHours": 1, "hasMeal": True, "transport": 12.5, "remarks": "rain stop"},
    )

    assert record.normal_hours == 7.5
    assert record.overtime_hours == 1.0
    assert record.has_meal_allowance is True
    assert record.transport_claim == 12.5
    assert record.remarks == "rain stop"


def test_negative_override_is_rejected(clock_service, presence_repo):
    clock_service.clock_in("W-001", "P-001", now=T0)
    with pytest.raises(ValidationError):
        clock_service.clock_out("W-001", now=T0 + timedelta(hours=9), overrides={"otHours": -1})
    assert presence_repo.get("W-001") is not None


def test_finalizing_the_same_draft_twice_writes_one_record(clock_service, ledger_repo):
    clock_service.clock_in("W-001", "P-001", now=T0)
    draft = clock_service.start_clock_out("W-001", now=T0 + timedelta(hours=9))

    first = clock_service.finalize_clock_out(draft)
    second = clock_service.finalize_clock_out(draft)

    assert first is not None
    assert second is None
    assert len(ledger_repo.list_all()) == 1


def test_draft_is_stale_after_clock_in_on_another_device(clock_service, presence_repo, ledger_repo):
    clock_service.clock_in("W-001", "P-001", now=T0)
    draft = clock_service.start_clock_out("W-001", now=T0 + timedelta(hours=9))
    clock_service.clock_in("W-001", "P-001", now=T0 + timedelta(hours=9, minutes=1))

    with pytest.raises(ConflictError):
        clock_service.finalize_clock_out(draft)
    assert ledger_repo.list_all() == []
    assert presence_repo.get("W-001").version == 2


def test_draft_from_an_earlier_shift_cannot_close_the_next_one(clock_service, presence_repo, ledger_repo):
    clock_service.clock_in("W-001", "P-001", now=T0)
    first_device = clock_service.start_clock_out("W-001", now=T0 + timedelta(hours=9))
    second_device = clock_service.start_clock_out("W-001", now=T0 + timedelta(hours=9))
    assert clock_service.finalize_clock_out(first_device) is not None

    next_shift = clock_service.clock_in("W-001", "P-001", now=T0 + timedelta(hours=24))
    assert next_shift.version == second_device.clock_in_version

    with pytest.raises(ConflictError):
        clock_service.finalize_clock_out(second_device)
    assert len(ledger_repo.list_all()) == 1
    assert presence_repo.get("W-001").clock_in_time == T0 + timedelta(hours=24)


def test_clock_out_with_token_of_an_earlier_shift_conflicts(clock_service, presence_repo, ledger_repo):
    earlier = clock_service.clock_in("W-001", "P-001", now=T0)
    clock_service.clock_out("W-001", now=T0 + timedelta(hours=9))
    clock_service.clock_in("W-001", "P-001", now=T0 + timedelta(hours=24))

    with pytest.raises(ConflictError):
        clock_service.clock_out(
            "W-001",
            now=T0 + timedelta(hours=33),
            expected_version=earlier.version,
            expected_token=earlier.token,
        )
    assert len(ledger_repo.list_all()) == 1
    assert presence_repo.get("W-001") is not None


def test_clock_out_with_outdated_version_conflicts(clock_service):
    clock_service.clock_in("W-001", "P-001", now=T0)
    clock_service.clock_in("W-001", "P-001", now=T0)

    with pytest.raises(ConflictError):
        clock_service.clock_out("W-001", now=T0 + timedelta(hours=9), expected_version=1)


def test_overnight_record_is_dated_at_clock_in(clock_service):
    start = datetime(2025, 3, 4, 20, 0, tzinfo=timezone.utc)
    clock_service.clock_in("W-001", "P-001", overnight=True, now=start)
    record = clock_service.clock_out("W-001", now=start + timedelta(hours=10))

    assert record.date == date(2025, 3, 4)
    assert record.overtime_hours == 1.0


def test_non_overnight_record_is_dated_at_clock_out(clock_service):
    start = datetime(2025, 3, 4, 20, 0, tzinfo=timezone.utc)
    clock_service.clock_in("W-001", "P-001", now=start)
    record = clock_service.clock_out("W-001", now=start + timedelta(hours=10))

    assert record.date == date(2025, 3, 5)


def test_failed_append_restores_presence(clock_service, presence_repo, ledger_repo):
    clock_service.clock_in("W-001", "P-001", now=T0)
    ledger_repo.fail_next_append = True

    with pytest.raises(RuntimeError):
        clock_service.clock_out("W-001", now=T0 + timedelta(hours=9))

    restored = presence_repo.get("W-001")
    assert restored is not None
    assert restored.clock_in_time == T0
    assert ledger_repo.list_all() == []


def test_draft_can_be_retried_after_a_failed_append(clock_service, presence_repo, ledger_repo):
    clock_service.clock_in("W-001", "P-001", now=T0)
    clock_service.clock_in("W-001", "P-002", now=T0)
    draft = clock_service.start_clock_out("W-001", now=T0 + timedelta(hours=9))
    ledger_repo.fail_next_append = True

    with pytest.raises(RuntimeError):
        clock_service.finalize_clock_out(draft)
    assert presence_repo.get("W-001").version == draft.clock_in_version

    record = clock_service.finalize_clock_out(draft)
    assert record is not None
    assert ledger_repo.list_all() == [record]
    assert presence_repo.get("W-001") is None


def test_quarter_hour_overtime_rounds_half_up(clock_service):
    clock_service.clock_in("W-001", "P-001", now=T0)
    draft = clock_service.start_clock_out("W-001", now=T0 + timedelta(hours=9, minutes=15))

    assert draft.normal_hours == 8.0
    assert draft.overtime_hours == 0.3


def test_fixed_default_policy_proposes_eight_hours(presence_repo, ledger_repo, workers_repo):
    service = ClockService(presence_repo, ledger_repo, workers_repo, strategy=FixedDefaultStrategy())
    presence_repo.upsert(ActiveClockIn(worker_id="W-002", clock_in_time=T0, project_id="P-001"))

    draft = service.start_clock_out("W-002", now=T0 + timedelta(hours=3))

    assert (draft.normal_hours, draft.overtime_hours) == (8.0, 0.0)
    assert draft.elapsed_hours == 3.0
