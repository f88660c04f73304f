from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..common.validators import require_non_empty
from ..core.enums import ProjectStatus
from ..core.exceptions import ValidationError

DEFAULT_NAME = "SITE REFERENCE REQUIRED"
DEFAULT_CLIENT = "CLIENT REQUIRED"


@dataclass(frozen=True)
class Project:
    """Domain entity: a site that workers can be clocked in to."""

    id: str
    name: str = DEFAULT_NAME
    client: str = DEFAULT_CLIENT
    status: ProjectStatus = ProjectStatus.ACTIVE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Project":
        # Legacy rows keep name/client inside a projectData blob.
        blob = data.get("projectData") if isinstance(data.get("projectData"), Mapping) else {}
        try:
            status = ProjectStatus(str(data.get("status") or blob.get("status") or ProjectStatus.ACTIVE.value).upper())
        except ValueError as e:
            raise ValidationError(str(e))
        return cls(
            id=require_non_empty(data.get("id"), "Project id"),
            name=str(blob.get("name") or data.get("name") or DEFAULT_NAME),
            client=str(blob.get("client") or data.get("client") or DEFAULT_CLIENT),
            status=status,
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "client": self.client, "status": self.status.value}
