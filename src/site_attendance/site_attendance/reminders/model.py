from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_instant, to_iso_instant
from ..common.validators import as_bool, require_non_empty
from ..core.enums import ReminderScope
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Reminder:
    """Domain entity: a timed notice for one viewer, a list of viewers or everyone.

    SELF reminders carry a single ``is_dismissed`` flag; ALL/SPECIFIC reminders
    record each dismissing viewer in ``dismissed_by``.
    """

    id: str
    title: str
    message: str
    remind_at: datetime
    scope: ReminderScope
    created_by: str
    created_at: datetime
    created_by_name: Optional[str] = None
    related_id: Optional[str] = None
    target_user_ids: tuple[str, ...] = field(default_factory=tuple)
    is_dismissed: bool = False
    dismissed_by: tuple[str, ...] = field(default_factory=tuple)
    version: int = 1

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Reminder":
        try:
            scope = ReminderScope(str(data.get("scope") or ReminderScope.SELF.value).upper())
        except ValueError as e:
            raise ValidationError(str(e))
        remind_at = parse_iso_instant(data.get("remindAt"))
        return cls(
            id=require_non_empty(data.get("id"), "Reminder id"),
            title=str(data.get("title") or ""),
            message=require_non_empty(data.get("message"), "Reminder message"),
            remind_at=remind_at,
            scope=scope,
            created_by=require_non_empty(data.get("createdBy"), "Reminder creator"),
            created_at=parse_iso_instant(data["createdAt"]) if data.get("createdAt") else remind_at,
            created_by_name=data.get("createdByName") or None,
            related_id=data.get("relatedId") or None,
            target_user_ids=tuple(str(u) for u in (data.get("targetUserIds") or [])),
            is_dismissed=as_bool(data.get("isDismissed", False)),
            dismissed_by=tuple(str(u) for u in (data.get("dismissedBy") or [])),
            version=int(data.get("version") or 1),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "message": self.message,
            "remindAt": to_iso_instant(self.remind_at),
            "scope": self.scope.value,
            "createdBy": self.created_by,
            "createdByName": self.created_by_name,
            "createdAt": to_iso_instant(self.created_at),
            "relatedId": self.related_id,
            "targetUserIds": list(self.target_user_ids),
            "isDismissed": self.is_dismissed,
            "dismissedBy": list(self.dismissed_by),
            "version": self.version,
        }
