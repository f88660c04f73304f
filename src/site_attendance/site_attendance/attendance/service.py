from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_utc, parse_iso_date
from ..common.validators import as_bool, require_non_empty, require_non_negative
from ..core.exceptions import ConflictError, ValidationError
from ..workers.repository import WorkerRepository
from .model import ActiveClockIn, AttendanceRecord, ClockOutDraft
from .repository import AttendanceLedgerRepository, PresenceRepository
from .strategies.auto_derived_strategy import AutoDerivedStrategy
from .strategies.base import ClockOutStrategy

logger = logging.getLogger(__name__)


def _new_record_id() -> str:
    return f"ATT_{uuid.uuid4().hex}"


class ClockService:
    """Clock-in/out state machine: Idle <-> Present, one ledger entry per clock-out."""

    def __init__(
        self,
        presence: PresenceRepository,
        ledger: AttendanceLedgerRepository,
        workers: WorkerRepository,
        *,
        strategy: ClockOutStrategy | None = None,
        id_factory: Callable[[], str] = _new_record_id,
    ):
        self._presence = presence
        self._ledger = ledger
        self._workers = workers
        self._strategy = strategy or AutoDerivedStrategy()
        self._new_id = id_factory

    def present_workers(self) -> Sequence[ActiveClockIn]:
        return self._presence.list_all()

    def is_present(self, worker_id: str) -> bool:
        return self._presence.get(worker_id) is not None

    def clock_in(
        self,
        worker_id: str,
        project_id: str,
        *,
        overnight: bool = False,
        now: datetime | None = None,
    ) -> ActiveClockIn:
        now = now or now_utc()
        project_id = require_non_empty(project_id, "Site selection")
        worker_id = require_non_empty(worker_id, "Worker id")

        if not self._workers.get_by_id(worker_id):
            raise ValidationError(f"Worker {worker_id} does not exist")

        existing = self._presence.get(worker_id)
        if existing:
            # Last write wins: a second clock-in replaces the first.
            logger.info(
                "Replacing clock-in for %s (v%d on %s since %s)",
                worker_id,
                existing.version,
                existing.project_id,
                existing.clock_in_time.isoformat(),
            )

        return self._presence.upsert(
            ActiveClockIn(
                worker_id=worker_id,
                clock_in_time=now,
                project_id=project_id,
                is_overnight=bool(overnight),
                token=uuid.uuid4().hex,
            )
        )

    def start_clock_out(self, worker_id: str, *, now: datetime | None = None) -> Optional[ClockOutDraft]:
        """Propose the record for a clock-out; ``None`` when the worker is idle."""

        now = now or now_utc()
        clock_in = self._presence.get(worker_id)
        if not clock_in:
            return None

        decision = self._strategy.decide(clock_in_time=clock_in.clock_in_time, now=now)
        if decision.anomaly:
            logger.warning("Clock-out for %s: %s", worker_id, decision.anomaly)

        work_date = clock_in.clock_in_time.date() if clock_in.is_overnight else now.date()
        return ClockOutDraft(
            worker_id=worker_id,
            project_id=clock_in.project_id,
            date=work_date,
            clock_in_time=clock_in.clock_in_time,
            clock_out_time=now,
            clock_in_version=clock_in.version,
            elapsed_hours=decision.elapsed_hours,
            lunch_deduction=decision.lunch_deduction,
            normal_hours=decision.normal_hours,
            overtime_hours=decision.overtime_hours,
            has_meal_allowance=decision.suggest_meal_allowance,
            is_overnight=clock_in.is_overnight,
            anomaly=decision.anomaly,
            clock_in_token=clock_in.token,
        )

    def finalize_clock_out(
        self,
        draft: ClockOutDraft,
        *,
        overrides: Mapping[str, Any] | None = None,
        remarks: str | None = None,
    ) -> Optional[AttendanceRecord]:
        """Commit a (possibly edited) draft.

        The presence entry is removed first, checked against the version and
        token the draft was taken from, so two devices finalizing the same
        worker produce one record and a draft from an earlier shift cannot
        close a later one. ``None`` means another session already clocked the
        worker out.
        """

        draft = self.apply_overrides(draft, overrides or {})
        note = remarks if remarks is not None else (overrides or {}).get("remarks")
        if draft.anomaly:
            note = f"{note} | {draft.anomaly}" if note else draft.anomaly

        record = AttendanceRecord(
            id=self._new_id(),
            worker_id=draft.worker_id,
            date=draft.date,
            normal_hours=draft.normal_hours,
            overtime_hours=draft.overtime_hours,
            project_id=draft.project_id,
            has_meal_allowance=draft.has_meal_allowance,
            transport_claim=draft.transport_claim,
            remarks=note or None,
        )

        clock_in = self._presence.get(draft.worker_id)
        removed = self._presence.delete(
            draft.worker_id,
            expected_version=draft.clock_in_version,
            expected_token=draft.clock_in_token or None,
        )
        if not removed:
            logger.info("Clock-out for %s ignored: worker is no longer clocked in", draft.worker_id)
            return None

        try:
            self._ledger.append(record)
        except Exception:
            logger.exception("Appending attendance for %s failed, restoring clock-in", draft.worker_id)
            if clock_in and clock_in.version == draft.clock_in_version:
                self._presence.restore(clock_in)
            raise

        logger.info(
            "Clocked out %s: %.1fh normal, %.1fh OT on %s",
            record.worker_id,
            record.normal_hours,
            record.overtime_hours,
            record.date.isoformat(),
        )
        return record

    def clock_out(
        self,
        worker_id: str,
        *,
        now: datetime | None = None,
        overrides: Mapping[str, Any] | None = None,
        expected_version: int | None = None,
        expected_token: str | None = None,
    ) -> Optional[AttendanceRecord]:
        draft = self.start_clock_out(worker_id, now=now)
        if draft is None:
            return None
        stale_version = expected_version is not None and draft.clock_in_version != expected_version
        stale_token = bool(expected_token) and draft.clock_in_token != expected_token
        if stale_version or stale_token:
            raise ConflictError(f"Clock-in for {worker_id} was changed on another device, reload and retry")
        return self.finalize_clock_out(draft, overrides=overrides)

    @staticmethod
    def apply_overrides(draft: ClockOutDraft, overrides: Mapping[str, Any]) -> ClockOutDraft:
        """Apply supervisor edits made on the confirmation step (wire names accepted)."""

        changes: dict[str, Any] = {}
        if "normalHours" in overrides:
            changes["normal_hours"] = require_non_negative(overrides["normalHours"], "Normal hours")
        if "otHours" in overrides:
            changes["overtime_hours"] = require_non_negative(overrides["otHours"], "Overtime hours")
        if "hasMeal" in overrides:
            changes["has_meal_allowance"] = as_bool(overrides["hasMeal"])
        if "transport" in overrides:
            changes["transport_claim"] = require_non_negative(overrides["transport"] or 0, "Transport claim")
        if "projectId" in overrides:
            changes["project_id"] = require_non_empty(overrides["projectId"], "Project id")
        if "date" in overrides:
            changes["date"] = parse_iso_date(overrides["date"])
        return replace(draft, **changes) if changes else draft
