from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date
from typing import Callable, Optional

import pytest

from src.site_attendance.site_attendance.attendance.model import ActiveClockIn, AttendanceRecord
from src.site_attendance.site_attendance.attendance.service import ClockService
from src.site_attendance.site_attendance.context import AppContext, AppSettings
from src.site_attendance.site_attendance.core.enums import RateType, WorkerType
from src.site_attendance.site_attendance.core.exceptions import ConflictError
from src.site_attendance.site_attendance.projects.model import Project
from src.site_attendance.site_attendance.reminders.model import Reminder
from src.site_attendance.site_attendance.rules.holidays import HolidayCalendar
from src.site_attendance.site_attendance.workers.model import Worker


class InMemoryWorkers:
    def __init__(self, workers=()):
        self._by_id: dict[str, Worker] = {w.id: w for w in workers}

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        return self._by_id.get(worker_id)

    def list_all(self):
        return list(self._by_id.values())

    def upsert(self, worker: Worker) -> Worker:
        self._by_id[worker.id] = worker
        return worker

    def delete(self, worker_id: str) -> bool:
        return self._by_id.pop(worker_id, None) is not None


class InMemoryProjects:
    def __init__(self, projects=()):
        self._by_id: dict[str, Project] = {p.id: p for p in projects}

    def get_by_id(self, project_id: str) -> Optional[Project]:
        return self._by_id.get(project_id)

    def list_all(self):
        return list(self._by_id.values())

    def upsert(self, project: Project) -> Project:
        self._by_id[project.id] = project
        return project

    def delete(self, project_id: str) -> bool:
        return self._by_id.pop(project_id, None) is not None


class InMemoryPresence:
    """Same rules as the MySQL table: insert at v1, bump on update, CAS on request, token kept across edits."""

    def __init__(self):
        self._by_worker: dict[str, ActiveClockIn] = {}

    def get(self, worker_id: str) -> Optional[ActiveClockIn]:
        return self._by_worker.get(worker_id)

    def list_all(self):
        return list(self._by_worker.values())

    def upsert(self, clock_in: ActiveClockIn, *, expected_version: Optional[int] = None) -> ActiveClockIn:
        current = self._by_worker.get(clock_in.worker_id)
        if expected_version is not None and (current.version if current else None) != expected_version:
            raise ConflictError(f"Clock-in for {clock_in.worker_id} changed")
        token = clock_in.token or (current.token if current else "") or uuid.uuid4().hex
        stored = replace(clock_in, version=current.version + 1 if current else 1, token=token)
        self._by_worker[clock_in.worker_id] = stored
        return stored

    def delete(
        self,
        worker_id: str,
        *,
        expected_version: Optional[int] = None,
        expected_token: Optional[str] = None,
    ) -> bool:
        current = self._by_worker.get(worker_id)
        if current is None:
            return False
        if expected_version is not None and current.version != expected_version:
            raise ConflictError(f"Clock-in for {worker_id} changed")
        if expected_token is not None and current.token != expected_token:
            raise ConflictError(f"Clock-in for {worker_id} was replaced")
        del self._by_worker[worker_id]
        return True

    def restore(self, clock_in: ActiveClockIn) -> None:
        self._by_worker.setdefault(clock_in.worker_id, clock_in)


class InMemoryLedger:
    def __init__(self, records=()):
        self._by_id: dict[str, AttendanceRecord] = {r.id: r for r in records}
        self.fail_next_append = False

    def append(self, record: AttendanceRecord) -> None:
        if self.fail_next_append:
            self.fail_next_append = False
            raise RuntimeError("disk full")
        if record.id in self._by_id:
            raise ConflictError(f"Attendance record {record.id} already exists")
        self._by_id[record.id] = record

    def get(self, record_id: str) -> Optional[AttendanceRecord]:
        return self._by_id.get(record_id)

    def list_all(self):
        return list(self._by_id.values())

    def list_for_period(self, *, start: date, end: date, worker_id: Optional[str] = None):
        return [
            r
            for r in self._by_id.values()
            if start <= r.date <= end and (worker_id is None or r.worker_id == worker_id)
        ]

    def delete(self, record_id: str) -> bool:
        return self._by_id.pop(record_id, None) is not None


class InMemoryReminders:
    def __init__(self, reminders=()):
        self._by_id: dict[str, Reminder] = {r.id: r for r in reminders}
        # Simulates another device writing just before our CAS.
        self.interfere: Optional[Callable[["InMemoryReminders"], None]] = None

    def get(self, reminder_id: str) -> Optional[Reminder]:
        return self._by_id.get(reminder_id)

    def list_all(self):
        return list(self._by_id.values())

    def upsert(self, reminder: Reminder, *, expected_version: Optional[int] = None) -> Reminder:
        if self.interfere is not None:
            hook, self.interfere = self.interfere, None
            hook(self)
        current = self._by_id.get(reminder.id)
        if expected_version is not None and (current.version if current else None) != expected_version:
            raise ConflictError(f"Reminder {reminder.id} changed")
        stored = replace(reminder, version=current.version + 1 if current else 1)
        self._by_id[reminder.id] = stored
        return stored

    def delete(self, reminder_id: str) -> bool:
        return self._by_id.pop(reminder_id, None) is not None



@pytest.fixture
def holidays() -> HolidayCalendar:
    return HolidayCalendar.from_iterable(["2025-12-25", "2025-05-01"])


@pytest.fixture
def app_context(holidays) -> AppContext:
    return AppContext.static(AppSettings(holidays=holidays))


@pytest.fixture
def workers_repo() -> InMemoryWorkers:
    return InMemoryWorkers(
        [
            Worker(id="W-001", name="RAHMAN", worker_type=WorkerType.FOREIGN, rate_type=RateType.MONTHLY, salary=4400),
            Worker(id="W-002", name="TAN AH KOW", rate_type=RateType.DAILY, salary=160),
            Worker(id="W-003", name="KUMAR", worker_type=WorkerType.FOREIGN, rate_type=RateType.HOURLY, salary=12),
        ]
    )


@pytest.fixture
def projects_repo() -> InMemoryProjects:
    return InMemoryProjects([Project(id="P-001", name="WOODLANDS BLK 12", client="HDB")])


@pytest.fixture
def presence_repo() -> InMemoryPresence:
    return InMemoryPresence()


@pytest.fixture
def ledger_repo() -> InMemoryLedger:
    return InMemoryLedger()


@pytest.fixture
def reminders_repo() -> InMemoryReminders:
    return InMemoryReminders()


@pytest.fixture
def clock_service(presence_repo, ledger_repo, workers_repo) -> ClockService:
    counter = iter(range(1, 10_000))
    return ClockService(presence_repo, ledger_repo, workers_repo, id_factory=lambda: f"ATT_{next(counter)}")
