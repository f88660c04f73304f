from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.enums import ReminderScope
from ..core.exceptions import ConflictError, ValidationError
from .model import Reminder
from .repository import ReminderRepository

logger = logging.getLogger(__name__)

DISMISS_ATTEMPTS = 3


def is_dismissed_by(reminder: Reminder, viewer_id: str) -> bool:
    if reminder.scope == ReminderScope.SELF:
        return reminder.is_dismissed
    return reminder.is_dismissed or viewer_id in reminder.dismissed_by


def is_visible_to(reminder: Reminder, viewer_id: str) -> bool:
    if reminder.scope == ReminderScope.ALL:
        return True
    if reminder.scope == ReminderScope.SELF:
        return reminder.created_by == viewer_id
    return viewer_id in reminder.target_user_ids


def is_due_for(reminder: Reminder, viewer_id: str, now: datetime) -> bool:
    if is_dismissed_by(reminder, viewer_id):
        return False
    if reminder.remind_at > now:
        return False
    return is_visible_to(reminder, viewer_id)


def due_reminders(reminders: Iterable[Reminder], viewer_id: str, now: datetime) -> list[Reminder]:
    return [r for r in reminders if is_due_for(r, viewer_id, now)]


def mark_dismissed(reminder: Reminder, viewer_id: str) -> Reminder:
    """SELF: one global flag. ALL/SPECIFIC: per-viewer acknowledgment."""

    if reminder.scope == ReminderScope.SELF:
        return replace(reminder, is_dismissed=True)
    if viewer_id in reminder.dismissed_by:
        return reminder
    return replace(reminder, dismissed_by=(*reminder.dismissed_by, viewer_id))


class ReminderService:
    def __init__(self, reminders: ReminderRepository):
        self._reminders = reminders

    def list_all(self) -> Sequence[Reminder]:
        return self._reminders.list_all()

    def create(
        self,
        *,
        created_by: str,
        message: str,
        remind_at: datetime,
        title: str = "",
        scope: ReminderScope = ReminderScope.SELF,
        target_user_ids: Iterable[str] = (),
        created_by_name: Optional[str] = None,
        related_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Reminder:
        targets = tuple(str(t) for t in target_user_ids)
        if scope == ReminderScope.SPECIFIC and not targets:
            raise ValidationError("Choose at least one recipient for a direct reminder")

        reminder = Reminder(
            id=f"REM_{uuid.uuid4().hex}",
            title=(title or "").strip().upper(),
            message=require_non_empty(message, "Reminder message").upper(),
            remind_at=remind_at,
            scope=scope,
            created_by=require_non_empty(created_by, "Reminder creator"),
            created_by_name=created_by_name,
            created_at=now or now_utc(),
            related_id=related_id,
            target_user_ids=targets if scope == ReminderScope.SPECIFIC else (),
        )
        return self._reminders.upsert(reminder)

    def due_for(self, viewer_id: str, *, now: Optional[datetime] = None) -> list[Reminder]:
        return due_reminders(self._reminders.list_all(), viewer_id, now or now_utc())

    def next_due(self, viewer_id: str, *, now: Optional[datetime] = None) -> Optional[Reminder]:
        due = self.due_for(viewer_id, now=now)
        return due[0] if due else None

    def dismiss(self, reminder_id: str, viewer_id: str) -> Reminder:
        viewer_id = require_non_empty(viewer_id, "Viewer id")

        for attempt in range(1, DISMISS_ATTEMPTS + 1):
            current = self._reminders.get(reminder_id)
            if not current:
                raise ValidationError(f"Reminder {reminder_id} does not exist")
            if not is_visible_to(current, viewer_id):
                raise ValidationError(f"Reminder {reminder_id} is not addressed to {viewer_id}")

            updated = mark_dismissed(current, viewer_id)
            if updated is current:
                return current
            try:
                return self._reminders.upsert(updated, expected_version=current.version)
            except ConflictError:
                logger.info("Reminder %s changed during dismissal (attempt %d), retrying", reminder_id, attempt)

        raise ConflictError(f"Reminder {reminder_id} is being edited elsewhere, try again")
