from __future__ import annotations

import logging

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor

logger = logging.getLogger(__name__)


class HealthService:
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def check(self) -> dict:
        try:
            with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
                cur.execute("SELECT 1")
                cur.fetchone()
        except Exception as e:
            logger.warning("Database health check failed: %s", e)
            return {"status": "disconnected", "message": "SQL Offline - check server logs"}
        return {"status": "connected", "message": "SQL Engine Linked"}
