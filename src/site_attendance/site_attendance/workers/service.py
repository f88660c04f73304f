from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..rules.compliance import days_left, is_expiring_soon
from .model import Worker
from .repository import WorkerRepository


@dataclass(frozen=True)
class PassExpiryRow:
    worker_id: str
    name: str
    pass_expiry_date: date
    days_left: int

    def to_dict(self) -> dict:
        return {
            "workerId": self.worker_id,
            "name": self.name,
            "passExpiryDate": self.pass_expiry_date.isoformat(),
            "daysLeft": self.days_left,
        }


class WorkerService:
    def __init__(self, workers: WorkerRepository):
        self._workers = workers

    def supervisor_roster(self) -> Sequence[Worker]:
        """Site workers a supervisor can clock in (hidden and office staff excluded)."""

        return [w for w in self._workers.list_all() if w.show_in_supervisor_app and not w.is_office_staff]

    def expiring_passes(self, *, now: Optional[datetime] = None) -> list[PassExpiryRow]:
        now = now or now_utc()
        rows = [
            PassExpiryRow(
                worker_id=w.id,
                name=w.name,
                pass_expiry_date=w.pass_expiry_date,
                days_left=days_left(w.pass_expiry_date, now),
            )
            for w in self._workers.list_all()
            if w.pass_expiry_date and is_expiring_soon(w.pass_expiry_date, now)
        ]
        rows.sort(key=lambda r: r.pass_expiry_date)
        return rows
