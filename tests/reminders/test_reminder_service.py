from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from src.site_attendance.site_attendance.core.enums import ReminderScope
from src.site_attendance.site_attendance.core.exceptions import ConflictError, ValidationError
from src.site_attendance.site_attendance.reminders.model import Reminder
from src.site_attendance.site_attendance.reminders.service import ReminderService, is_due_for

NOW = datetime(2025, 3, 4, 9, 0, tzinfo=timezone.utc)


def _reminder(rid="R1", scope=ReminderScope.ALL, created_by="admin", targets=(), remind_at=NOW - timedelta(minutes=1)):
    return Reminder(
        id=rid,
        title="PERMIT",
        message="RENEW WORK PERMIT",
        remind_at=remind_at,
        scope=scope,
        created_by=created_by,
        created_at=NOW - timedelta(days=1),
        target_user_ids=tuple(targets),
    )


def test_future_reminder_is_not_due():
    assert not is_due_for(_reminder(remind_at=NOW + timedelta(seconds=1)), "admin", NOW)
    assert is_due_for(_reminder(remind_at=NOW), "admin", NOW)


def test_specific_scope_only_reaches_targets():
    reminder = _reminder(scope=ReminderScope.SPECIFIC, targets=["u1"])

    assert is_due_for(reminder, "u1", NOW)
    assert not is_due_for(reminder, "u2", NOW)


def test_self_scope_only_reaches_creator():
    reminder = _reminder(scope=ReminderScope.SELF, created_by="u1")

    assert is_due_for(reminder, "u1", NOW)
    assert not is_due_for(reminder, "u2", NOW)


def test_all_scope_dismissal_is_per_viewer(reminders_repo):
    reminders_repo.upsert(_reminder(scope=ReminderScope.ALL))
    service = ReminderService(reminders_repo)

    service.dismiss("R1", "u1")

    assert service.due_for("u1", now=NOW) == []
    assert [r.id for r in service.due_for("u2", now=NOW)] == ["R1"]
    assert reminders_repo.get("R1").dismissed_by == ("u1",)
    assert reminders_repo.get("R1").is_dismissed is False


def test_self_scope_dismissal_is_global(reminders_repo):
    reminders_repo.upsert(_reminder(scope=ReminderScope.SELF, created_by="u1"))
    service = ReminderService(reminders_repo)

    service.dismiss("R1", "u1")

    stored = reminders_repo.get("R1")
    assert stored.is_dismissed is True
    assert stored.dismissed_by == ()
    assert service.due_for("u1", now=NOW) == []


def test_dismissing_twice_does_not_duplicate_viewer(reminders_repo):
    reminders_repo.upsert(_reminder())
    service = ReminderService(reminders_repo)

    service.dismiss("R1", "u1")
    again = service.dismiss("R1", "u1")

    assert again.dismissed_by == ("u1",)


def test_concurrent_dismissals_both_persist(reminders_repo):
    reminders_repo.upsert(_reminder())
    service = ReminderService(reminders_repo)

    def other_device(repo):
        current = repo.get("R1")
        repo.upsert(replace(current, dismissed_by=("u2",)), expected_version=current.version)

    reminders_repo.interfere = other_device
    service.dismiss("R1", "u1")

    assert set(reminders_repo.get("R1").dismissed_by) == {"u1", "u2"}


def test_dismiss_gives_up_after_repeated_conflicts(reminders_repo):
    reminders_repo.upsert(_reminder())

    class AlwaysConflicting:
        def get(self, reminder_id):
            return reminders_repo.get(reminder_id)

        def upsert(self, reminder, *, expected_version=None):
            raise ConflictError("changed")

    with pytest.raises(ConflictError):
        ReminderService(AlwaysConflicting()).dismiss("R1", "u1")


def test_only_the_creator_can_dismiss_a_self_reminder(reminders_repo):
    reminders_repo.upsert(_reminder(scope=ReminderScope.SELF, created_by="u1"))
    service = ReminderService(reminders_repo)

    with pytest.raises(ValidationError):
        service.dismiss("R1", "u2")

    assert reminders_repo.get("R1").is_dismissed is False
    assert is_due_for(reminders_repo.get("R1"), "u1", NOW)


def test_non_target_cannot_dismiss_a_specific_reminder(reminders_repo):
    reminders_repo.upsert(_reminder(scope=ReminderScope.SPECIFIC, targets=["u1"]))
    service = ReminderService(reminders_repo)

    with pytest.raises(ValidationError):
        service.dismiss("R1", "u3")

    assert reminders_repo.get("R1").dismissed_by == ()
    service.dismiss("R1", "u1")
    assert reminders_repo.get("R1").dismissed_by == ("u1",)


def test_dismiss_unknown_reminder(reminders_repo):
    with pytest.raises(ValidationError):
        ReminderService(reminders_repo).dismiss("missing", "u1")


def test_next_due_returns_first_in_stored_order(reminders_repo):
    reminders_repo.upsert(_reminder("R1"))
    reminders_repo.upsert(_reminder("R2"))
    service = ReminderService(reminders_repo)

    assert service.next_due("u1", now=NOW).id == "R1"
    assert len(service.due_for("u1", now=NOW)) == 2


def test_create_uppercases_and_validates_targets(reminders_repo):
    service = ReminderService(reminders_repo)

    with pytest.raises(ValidationError):
        service.create(created_by="admin", message="call client", remind_at=NOW, scope=ReminderScope.SPECIFIC)

    created = service.create(
        created_by="admin",
        message="call client",
        title="follow up",
        remind_at=NOW,
        scope=ReminderScope.SPECIFIC,
        target_user_ids=["u1"],
        now=NOW,
    )
    assert created.message == "CALL CLIENT"
    assert created.title == "FOLLOW UP"
    assert created.version == 1
    assert service.next_due("u1", now=NOW).id == created.id


def test_reminder_wire_round_trip_keeps_audience():
    reminder = _reminder(scope=ReminderScope.SPECIFIC, targets=["u1", "u2"])

    assert Reminder.from_dict(reminder.to_dict()) == reminder
