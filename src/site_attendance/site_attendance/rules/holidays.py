"""Public holiday calendar and overtime multiplier selection.

The holiday list is data, not code: it is read from a JSON file whose path can
be set with the ``HOLIDAYS_FILE`` setting. The packaged file holds the
Singapore gazetted holidays.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Union

from ..common.datetime_utils import parse_iso_date
from ..core.constants import OT_MULTIPLIER_HOLIDAY, OT_MULTIPLIER_NORMAL
from ..core.exceptions import ValidationError

DEFAULT_HOLIDAYS_FILE = Path(__file__).resolve().parent / "data" / "public_holidays.json"

SUNDAY = 6


@dataclass(frozen=True)
class HolidayCalendar:
    dates: FrozenSet[date] = field(default_factory=frozenset)
    jurisdiction: str = "SG"

    @classmethod
    def from_iterable(cls, values: Iterable[Union[str, date]], *, jurisdiction: str = "SG") -> "HolidayCalendar":
        parsed = {v if isinstance(v, date) else parse_iso_date(v) for v in values}
        return cls(dates=frozenset(parsed), jurisdiction=jurisdiction)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "HolidayCalendar":
        path = Path(path)
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ValidationError(f"Cannot read holiday file {path}: {e}")

        if isinstance(payload, list):
            return cls.from_iterable(payload)
        return cls.from_iterable(payload.get("dates", []), jurisdiction=str(payload.get("jurisdiction", "SG")))

    def is_public_holiday(self, day: date) -> bool:
        return day in self.dates

    def overtime_multiplier(self, day: date) -> float:
        if day.weekday() == SUNDAY or self.is_public_holiday(day):
            return OT_MULTIPLIER_HOLIDAY
        return OT_MULTIPLIER_NORMAL


def load_holiday_calendar(path: Optional[Union[str, Path]] = None) -> HolidayCalendar:
    return HolidayCalendar.from_file(path or DEFAULT_HOLIDAYS_FILE)
