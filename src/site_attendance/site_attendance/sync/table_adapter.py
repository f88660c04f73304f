"""Legacy full-table contract on top of per-record repositories.

Older clients ``POST /api/<table>`` with the whole collection. The adapter turns
that into per-record writes: new and changed entries are upserted, entries
missing from the payload are deleted. Stale writes are not applied blindly:

- versioned tables (presence, reminders) keep the stored entry when the
  incoming one carries an older ``version``;
- immutable tables (the attendance ledger) keep the stored record when an
  incoming record reuses its id with different content.

Both cases are reported as conflicts and logged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, Sequence, TypeVar

from ..core.exceptions import ConflictError, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ReplaceResult:
    table: str
    upserted: list[str] = field(default_factory=list)
    unchanged: int = 0
    deleted: list[str] = field(default_factory=list)
    conflicts: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "table": self.table,
            "upserted": len(self.upserted),
            "unchanged": self.unchanged,
            "deleted": len(self.deleted),
            "conflicts": list(self.conflicts),
        }


class TableReplaceAdapter(Generic[T]):
    def __init__(
        self,
        table: str,
        *,
        parse: Callable[[Mapping[str, Any]], T],
        key: Callable[[T], str],
        list_all: Callable[[], Sequence[T]],
        save: Callable[[T, Optional[T]], Any],
        delete: Callable[[str], Any],
        versioned: bool = False,
        immutable: bool = False,
    ):
        self.table = table
        self._parse = parse
        self._key = key
        self._list_all = list_all
        self._save = save
        self._delete = delete
        self._versioned = versioned
        self._immutable = immutable

    def list_dicts(self) -> list[dict]:
        return [item.to_dict() for item in self._list_all()]

    def _same(self, stored: T, incoming: T) -> bool:
        if self._versioned:
            return replace(incoming, version=stored.version) == stored
        return incoming == stored

    def replace_all(self, payload: Iterable[Mapping[str, Any]]) -> ReplaceResult:
        if not isinstance(payload, list):
            raise ValidationError(f"{self.table}: expected a JSON array")

        incoming: dict[str, tuple[T, Mapping[str, Any]]] = {}
        for raw in payload:
            if not isinstance(raw, Mapping):
                raise ValidationError(f"{self.table}: every entry must be an object")
            item = self._parse(raw)
            k = self._key(item)
            if k in incoming:
                logger.warning("%s: duplicate id %s in payload, keeping the last one", self.table, k)
            incoming[k] = (item, raw)

        stored = {self._key(item): item for item in self._list_all()}
        result = ReplaceResult(table=self.table)

        for k, (item, raw) in incoming.items():
            current = stored.get(k)
            if current is not None and self._same(current, item):
                result.unchanged += 1
                continue

            if current is not None and self._immutable:
                result.conflicts.append(k)
                continue

            if current is not None and self._versioned and "version" in raw and item.version < current.version:
                result.conflicts.append(k)
                continue

            try:
                self._save(item, current)
            except ConflictError as e:
                logger.warning("%s: %s", self.table, e)
                result.conflicts.append(k)
                continue
            result.upserted.append(k)

        for k in sorted(stored.keys() - incoming.keys()):
            self._delete(k)
            result.deleted.append(k)

        if result.deleted:
            logger.warning(
                "%s: full-table write removed %d entries: %s",
                self.table,
                len(result.deleted),
                ", ".join(result.deleted),
            )
        if result.conflicts:
            logger.warning(
                "%s: kept stored version for %d diverging entries: %s",
                self.table,
                len(result.conflicts),
                ", ".join(result.conflicts),
            )
        logger.info("%s: replace_all %s", self.table, result.to_dict())
        return result
