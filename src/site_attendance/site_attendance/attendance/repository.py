from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import ActiveClockIn, AttendanceRecord


class PresenceRepository(Protocol):
    """Active Presence Set, addressable per worker.

    ``expected_version`` turns a write into a compare-and-swap: the call raises
    ``ConflictError`` when the stored version differs. ``None`` writes
    unconditionally. ``expected_token`` does the same for the clock-in token,
    so a draft taken during an earlier shift never matches a later one.
    """

    def get(self, worker_id: str) -> Optional[ActiveClockIn]:
        raise NotImplementedError

    def list_all(self) -> Sequence[ActiveClockIn]:
        raise NotImplementedError

    def upsert(self, clock_in: ActiveClockIn, *, expected_version: Optional[int] = None) -> ActiveClockIn:
        raise NotImplementedError

    def delete(
        self,
        worker_id: str,
        *,
        expected_version: Optional[int] = None,
        expected_token: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def restore(self, clock_in: ActiveClockIn) -> None:
        """Put back a removed entry as it was (same version and token); no-op when the worker is present again."""

        raise NotImplementedError


class AttendanceLedgerRepository(Protocol):
    """Append-only ledger of finalized attendance records."""

    def append(self, record: AttendanceRecord) -> None:
        """Raises ``ConflictError`` when a record with the same id already exists."""

        raise NotImplementedError

    def get(self, record_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_period(
        self,
        *,
        start: date,
        end: date,
        worker_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def delete(self, record_id: str) -> bool:
        """Admin-only removal of a ledger entry."""

        raise NotImplementedError
