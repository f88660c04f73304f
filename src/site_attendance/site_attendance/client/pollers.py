from __future__ import annotations

import logging
from typing import Callable, Optional

from ..common.polling import PollingLoop
from ..context import SessionContext
from ..core.constants import HEALTH_POLL_SECONDS, REMINDER_POLL_SECONDS
from ..reminders.model import Reminder
from .api_client import HealthStatus, PersistenceClient

logger = logging.getLogger(__name__)


class HealthMonitor:
    """Tracks server reachability; ``on_change`` fires when it flips."""

    def __init__(self, client: PersistenceClient, *, on_change: Optional[Callable[[HealthStatus], None]] = None):
        self._client = client
        self._on_change = on_change
        self.status: Optional[HealthStatus] = None

    @property
    def online(self) -> bool:
        return bool(self.status and self.status.success)

    def tick(self) -> HealthStatus:
        status = self._client.probe_health()
        changed = self.status is None or status.success != self.status.success
        self.status = status
        if changed:
            if status.success:
                logger.info("Server online: %s", status.message)
            else:
                logger.warning("Server offline: %s", status.message)
            if self._on_change:
                self._on_change(status)
        return status

    def loop(self, interval: float = HEALTH_POLL_SECONDS) -> PollingLoop:
        return PollingLoop(self.tick, interval=interval, name="health-monitor")


class ReminderPoller:
    """Shows one due reminder at a time for the session's viewer.

    The first due reminder becomes ``current`` and is passed to ``on_reminder``
    once. The others wait in ``queued`` and surface on a later tick after the
    current one is dismissed.
    """

    def __init__(
        self,
        client: PersistenceClient,
        session: SessionContext,
        *,
        on_reminder: Optional[Callable[[Reminder], None]] = None,
    ):
        self._client = client
        self._session = session
        self._on_reminder = on_reminder
        self.current: Optional[Reminder] = None
        self.queued: list[Reminder] = []

    def tick(self) -> Optional[Reminder]:
        due = self._client.due_reminders(self._session.viewer_id)
        due_ids = [r.id for r in due]

        if self.current is not None and self.current.id in due_ids:
            self.queued = [r for r in due if r.id != self.current.id]
            return None

        self.current = due[0] if due else None
        self.queued = due[1:]
        if self.current is not None:
            logger.info("Reminder %s due for %s", self.current.id, self._session.viewer_id)
            if self._on_reminder:
                self._on_reminder(self.current)
        return self.current

    def dismiss_current(self) -> Optional[Reminder]:
        if self.current is None:
            return None
        updated = self._client.dismiss_reminder(self.current.id, self._session.viewer_id)
        self.current = None
        return updated

    def loop(self, interval: float = REMINDER_POLL_SECONDS) -> PollingLoop:
        return PollingLoop(self.tick, interval=interval, name=f"reminders-{self._session.viewer_id}")
