from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Optional, Sequence

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import ActiveClockIn
from .repository import PresenceRepository


def _row_to_clock_in(r: dict) -> ActiveClockIn:
    return ActiveClockIn(
        worker_id=str(r["worker_id"]),
        clock_in_time=from_db_datetime(r["clock_in_time"]),
        project_id=str(r["project_id"]),
        is_overnight=bool(r.get("is_overnight", False)),
        version=int(r["version"]),
        token=str(r.get("token") or ""),
    )


class MySQLPresenceRepository(PresenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, worker_id: str) -> Optional[ActiveClockIn]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT worker_id, clock_in_time, project_id, is_overnight, version, token
                FROM active_clockins
                WHERE worker_id=%s
                """,
                (worker_id,),
            )
            r = fetchone(cur)
            return _row_to_clock_in(r) if r else None

    def list_all(self) -> Sequence[ActiveClockIn]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT worker_id, clock_in_time, project_id, is_overnight, version, token
                FROM active_clockins
                ORDER BY clock_in_time ASC
                """
            )
            return [_row_to_clock_in(r) for r in fetchall(cur)]

    def upsert(self, clock_in: ActiveClockIn, *, expected_version: Optional[int] = None) -> ActiveClockIn:
        params = (to_db_datetime(clock_in.clock_in_time), clock_in.project_id, int(clock_in.is_overnight))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT version, token FROM active_clockins WHERE worker_id=%s FOR UPDATE", (clock_in.worker_id,))
            current = fetchone(cur)

            if expected_version is not None:
                stored = int(current["version"]) if current else None
                if stored != expected_version:
                    raise ConflictError(f"Clock-in for {clock_in.worker_id} changed (expected v{expected_version}, found v{stored})")

            token = clock_in.token or (current and current["token"]) or uuid.uuid4().hex
            if current:
                new_version = int(current["version"]) + 1
                cur.execute(
                    """
                    UPDATE active_clockins
                    SET clock_in_time=%s, project_id=%s, is_overnight=%s, version=%s, token=%s
                    WHERE worker_id=%s
                    """,
                    (*params, new_version, token, clock_in.worker_id),
                )
            else:
                new_version = 1
                cur.execute(
                    """
                    INSERT INTO active_clockins(worker_id, clock_in_time, project_id, is_overnight, version, token)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (clock_in.worker_id, *params, new_version, token),
                )

        return replace(clock_in, version=new_version, token=token)

    def delete(
        self,
        worker_id: str,
        *,
        expected_version: Optional[int] = None,
        expected_token: Optional[str] = None,
    ) -> bool:
        where = ["worker_id=%s"]
        args: list = [worker_id]
        if expected_version is not None:
            where.append("version=%s")
            args.append(expected_version)
        if expected_token is not None:
            where.append("token=%s")
            args.append(expected_token)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM active_clockins WHERE {' AND '.join(where)}", tuple(args))
            if cur.rowcount > 0:
                return True
            if len(where) == 1:
                return False

            cur.execute("SELECT version FROM active_clockins WHERE worker_id=%s", (worker_id,))
            current = fetchone(cur)
            if current:
                raise ConflictError(
                    f"Clock-in for {worker_id} changed (expected v{expected_version}, found v{current['version']})"
                )
            return False

    def restore(self, clock_in: ActiveClockIn) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO active_clockins(worker_id, clock_in_time, project_id, is_overnight, version, token)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    clock_in.worker_id,
                    to_db_datetime(clock_in.clock_in_time),
                    clock_in.project_id,
                    int(clock_in.is_overnight),
                    clock_in.version,
                    clock_in.token,
                ),
            )
