from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceLedgerRepository

_COLUMNS = """
    id, worker_id, work_date, normal_hours, overtime_hours, project_id,
    has_meal_allowance, transport_claim, remarks
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=str(r["id"]),
        worker_id=str(r["worker_id"]),
        date=r["work_date"],
        normal_hours=float(r.get("normal_hours") or 0),
        overtime_hours=float(r.get("overtime_hours") or 0),
        project_id=r.get("project_id"),
        has_meal_allowance=bool(r.get("has_meal_allowance", False)),
        transport_claim=float(r.get("transport_claim") or 0),
        remarks=r.get("remarks"),
    )


class MySQLAttendanceRepository(AttendanceLedgerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, record: AttendanceRecord) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        id, worker_id, work_date, normal_hours, overtime_hours, project_id,
                        has_meal_allowance, transport_claim, remarks
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.id,
                        record.worker_id,
                        record.date,
                        record.normal_hours,
                        record.overtime_hours,
                        record.project_id,
                        int(record.has_meal_allowance),
                        record.transport_claim,
                        record.remarks,
                    ),
                )
        except mysql.connector.IntegrityError as e:
            raise ConflictError(f"Attendance record {record.id} already exists") from e

    def get(self, record_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE id=%s", (record_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records ORDER BY work_date ASC, id ASC")
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_period(
        self,
        *,
        start: date,
        end: date,
        worker_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if worker_id is not None:
            clauses.append("worker_id=%s")
            params.append(worker_id)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE {where} ORDER BY work_date ASC, id ASC",
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def delete(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE id=%s", (record_id,))
            return cur.rowcount > 0
