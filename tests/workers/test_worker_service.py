from datetime import date, datetime, timezone

import pytest

from src.site_attendance.site_attendance.core.exceptions import ValidationError
from src.site_attendance.site_attendance.workers.model import Worker
from src.site_attendance.site_attendance.workers.service import WorkerService

NOW = datetime(2025, 3, 1, 0, 0, tzinfo=timezone.utc)


def test_supervisor_roster_hides_office_and_hidden_staff(workers_repo):
    workers_repo.upsert(Worker(id="W-004", name="LIM", occupation_title="Project Manager"))
    workers_repo.upsert(Worker(id="W-005", name="ONG", show_in_supervisor_app=False))
    workers_repo.upsert(Worker(id="W-006", name="SITI", occupation_title="HR Executive"))

    ids = [w.id for w in WorkerService(workers_repo).supervisor_roster()]

    assert ids == ["W-001", "W-002", "W-003"]


def test_expiring_passes_sorted_by_expiry(workers_repo):
    workers_repo.upsert(Worker(id="W-004", name="A", pass_expiry_date=date(2025, 4, 1)))
    workers_repo.upsert(Worker(id="W-005", name="B", pass_expiry_date=date(2025, 3, 10)))
    workers_repo.upsert(Worker(id="W-006", name="C", pass_expiry_date=date(2026, 1, 1)))

    rows = WorkerService(workers_repo).expiring_passes(now=NOW)

    assert [(r.worker_id, r.days_left) for r in rows] == [("W-005", 9), ("W-004", 31)]


def test_worker_from_dict_defaults_and_validation():
    worker = Worker.from_dict({"id": "W-1", "name": "ALI", "workerType": "foreign", "passExpiryDate": "2025-06-30"})

    assert worker.is_foreign
    assert worker.pass_expiry_date == date(2025, 6, 30)
    assert worker.rate_type.value == "MONTHLY"

    with pytest.raises(ValidationError):
        Worker.from_dict({"id": "W-2", "name": "BAD", "salary": -5})
    with pytest.raises(ValidationError):
        Worker.from_dict({"id": "W-3", "name": "BAD", "rateType": "WEEKLY"})
