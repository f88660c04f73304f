from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Reminder


class ReminderRepository(Protocol):
    def get(self, reminder_id: str) -> Optional[Reminder]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Reminder]:
        """Reminders in creation order (the due-check surfaces the first match)."""

        raise NotImplementedError

    def upsert(self, reminder: Reminder, *, expected_version: Optional[int] = None) -> Reminder:
        raise NotImplementedError

    def delete(self, reminder_id: str) -> bool:
        raise NotImplementedError
