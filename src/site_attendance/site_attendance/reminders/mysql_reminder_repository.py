from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..core.enums import ReminderScope
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    dump_json_list,
    fetchall,
    fetchone,
    from_db_datetime,
    load_json_list,
    to_db_datetime,
)
from .model import Reminder
from .repository import ReminderRepository

_COLUMNS = """
    id, title, message, remind_at, scope, created_by, created_by_name, created_at,
    related_id, target_user_ids, is_dismissed, dismissed_by, version
"""


def _row_to_reminder(r: dict) -> Reminder:
    return Reminder(
        id=str(r["id"]),
        title=r.get("title") or "",
        message=r["message"],
        remind_at=from_db_datetime(r["remind_at"]),
        scope=ReminderScope(r["scope"]),
        created_by=str(r["created_by"]),
        created_by_name=r.get("created_by_name"),
        created_at=from_db_datetime(r["created_at"]),
        related_id=r.get("related_id"),
        target_user_ids=tuple(str(u) for u in load_json_list(r.get("target_user_ids"))),
        is_dismissed=bool(r.get("is_dismissed", False)),
        dismissed_by=tuple(str(u) for u in load_json_list(r.get("dismissed_by"))),
        version=int(r["version"]),
    )


class MySQLReminderRepository(ReminderRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, reminder_id: str) -> Optional[Reminder]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM reminders WHERE id=%s", (reminder_id,))
            r = fetchone(cur)
            return _row_to_reminder(r) if r else None

    def list_all(self) -> Sequence[Reminder]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM reminders ORDER BY created_at ASC, id ASC")
            return [_row_to_reminder(r) for r in fetchall(cur)]

    def upsert(self, reminder: Reminder, *, expected_version: Optional[int] = None) -> Reminder:
        values = (
            reminder.title,
            reminder.message,
            to_db_datetime(reminder.remind_at),
            reminder.scope.value,
            reminder.created_by,
            reminder.created_by_name,
            to_db_datetime(reminder.created_at),
            reminder.related_id,
            dump_json_list(reminder.target_user_ids),
            int(reminder.is_dismissed),
            dump_json_list(reminder.dismissed_by),
        )

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT version FROM reminders WHERE id=%s FOR UPDATE", (reminder.id,))
            current = fetchone(cur)
            stored = int(current["version"]) if current else None

            if expected_version is not None and stored != expected_version:
                raise ConflictError(f"Reminder {reminder.id} changed (expected v{expected_version}, found v{stored})")

            if current:
                new_version = stored + 1
                cur.execute(
                    """
                    UPDATE reminders
                    SET title=%s, message=%s, remind_at=%s, scope=%s, created_by=%s, created_by_name=%s,
                        created_at=%s, related_id=%s, target_user_ids=%s, is_dismissed=%s, dismissed_by=%s,
                        version=%s
                    WHERE id=%s
                    """,
                    (*values, new_version, reminder.id),
                )
            else:
                new_version = 1
                cur.execute(
                    f"""
                    INSERT INTO reminders({_COLUMNS})
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (reminder.id, *values, new_version),
                )

        return replace(reminder, version=new_version)

    def delete(self, reminder_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM reminders WHERE id=%s", (reminder_id,))
            return cur.rowcount > 0
