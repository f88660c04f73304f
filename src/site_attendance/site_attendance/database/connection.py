from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import mysql.connector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = field(default="", repr=False)
    database: str = "site_attendance"
    connect_timeout: int = 10

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(values.get("host") or defaults.host),
            port=int(values.get("port") or defaults.port),
            user=str(values.get("user") or defaults.user),
            password=str(values.get("password") or ""),
            database=str(values.get("database") or defaults.database),
            connect_timeout=int(values.get("connect_timeout") or defaults.connect_timeout),
        )

    def describe(self) -> str:
        """``user@host:port/database`` for log lines (never the password)."""
        return f"{self.user}@{self.host}:{self.port}/{self.database}"

    def connect_kwargs(self, *, with_database: bool = True) -> dict:
        kwargs = dict(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            connection_timeout=self.connect_timeout,
        )
        if with_database:
            kwargs["database"] = self.database
        return kwargs


class DatabaseConnection:
    """Process-wide connection factory.

    Every repository call opens its own short-lived connection; nothing is
    pooled, so each request sees the latest committed rows.
    """

    _instance: Optional["DatabaseConnection"] = None
    _lock = threading.Lock()

    def __init__(self, config: DBConfig):
        self.config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        with cls._lock:
            if cls._instance is None:
                cls._instance = cls(config)
                logger.info("Database target %s", config.describe())
            elif cls._instance.config != config:
                logger.warning(
                    "Database already bound to %s, ignoring %s",
                    cls._instance.config.describe(),
                    config.describe(),
                )
            return cls._instance

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls._instance = None

    def connect(self):
        return mysql.connector.connect(**self.config.connect_kwargs())
