from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ProjectStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Project
from .repository import ProjectRepository


def _row_to_project(r: dict) -> Project:
    return Project(id=str(r["id"]), name=r["name"], client=r["client"], status=ProjectStatus(r["status"]))


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, project_id: str) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, client, status FROM projects WHERE id=%s", (project_id,))
            r = fetchone(cur)
            return _row_to_project(r) if r else None

    def list_all(self) -> Sequence[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, client, status FROM projects ORDER BY name ASC")
            return [_row_to_project(r) for r in fetchall(cur)]

    def upsert(self, project: Project) -> Project:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO projects(id, name, client, status) VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), client=VALUES(client), status=VALUES(status)
                """,
                (project.id, project.name, project.client, project.status.value),
            )
        return project

    def delete(self, project_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM projects WHERE id=%s", (project_id,))
            return cur.rowcount > 0
