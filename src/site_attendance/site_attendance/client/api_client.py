"""
Outline
probe_health()
get_table() / replace_table()
clock_in() / clock_out()
due_reminders() / dismiss_reminder()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

import httpx

from ..attendance.model import ActiveClockIn, AttendanceRecord
from ..core.constants import HEALTH_TIMEOUT_SECONDS
from ..core.exceptions import ConflictError, ConnectivityError, ValidationError
from ..reminders.model import Reminder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthStatus:
    success: bool
    message: str


class PersistenceClient:
    """
    Client for the persistence API used by the supervisor and back-office apps.

    Data calls wait for the server (no timeout) and are not retried; any
    transport failure is logged and raised as ``ConnectivityError``. Only the
    health probe is bounded, so a dead server shows up within two seconds.
    """

    def __init__(self, base_url: str, *, transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.Client(base_url=self.base_url, transport=transport, timeout=None)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "PersistenceClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise ConnectivityError(f"Server unreachable ({e.__class__.__name__})") from e

        if response.status_code == 400:
            raise ValidationError(self._message(response))
        if response.status_code == 409:
            raise ConflictError(self._message(response))
        if response.status_code >= 400:
            logger.error("%s %s returned %d: %s", method, path, response.status_code, response.text[:200])
            raise ConnectivityError(self._message(response))
        return response.json()

    @staticmethod
    def _message(response: httpx.Response) -> str:
        try:
            return str(response.json().get("message") or f"HTTP {response.status_code}")
        except ValueError:
            return f"HTTP {response.status_code}"

    def probe_health(self) -> HealthStatus:
        try:
            response = self._http.get("/api/health", timeout=HEALTH_TIMEOUT_SECONDS)
            data = response.json()
        except httpx.TimeoutException:
            return HealthStatus(False, "Server timeout")
        except (httpx.RequestError, ValueError) as e:
            logger.debug("Health probe failed: %s", e)
            return HealthStatus(False, "Server unreachable")

        if response.status_code != 200:
            return HealthStatus(False, f"HTTP {response.status_code}")
        return HealthStatus(data.get("status") == "connected", str(data.get("message") or ""))

    def get_table(self, name: str) -> list[dict]:
        data = self._request("GET", f"/api/{name}")
        if not isinstance(data, list):
            raise ConnectivityError(f"Unexpected response for table {name}")
        return data

    def replace_table(self, name: str, items: Iterable[Mapping[str, Any]]) -> dict:
        return self._request("POST", f"/api/{name}", json=[dict(i) for i in items])

    def clock_in(self, worker_id: str, project_id: str, *, overnight: bool = False) -> ActiveClockIn:
        data = self._request(
            "POST",
            "/api/clock-in",
            json={"workerId": worker_id, "projectId": project_id, "isOvernight": overnight},
        )
        return ActiveClockIn.from_dict(data["clockIn"])

    def clock_out_draft(self, worker_id: str) -> Optional[dict]:
        return self._request("POST", "/api/clock-out/draft", json={"workerId": worker_id})["draft"]

    def clock_out(
        self,
        worker_id: str,
        *,
        overrides: Optional[Mapping[str, Any]] = None,
        clock_in_version: Optional[int] = None,
        clock_in_token: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        payload: dict[str, Any] = {"workerId": worker_id, "overrides": dict(overrides or {})}
        if clock_in_version is not None:
            payload["clockInVersion"] = clock_in_version
        if clock_in_token:
            payload["clockInToken"] = clock_in_token
        record = self._request("POST", "/api/clock-out", json=payload)["record"]
        return AttendanceRecord.from_dict(record) if record else None

    def due_reminders(self, viewer_id: str) -> list[Reminder]:
        data = self._request("GET", "/api/reminders/due", params={"viewerId": viewer_id})
        return [Reminder.from_dict(r) for r in data]

    def dismiss_reminder(self, reminder_id: str, viewer_id: str) -> Reminder:
        data = self._request("POST", f"/api/reminders/{reminder_id}/dismiss", json={"viewerId": viewer_id})
        return Reminder.from_dict(data["reminder"])
