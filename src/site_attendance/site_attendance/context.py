"""Explicit runtime context.

Settings that change while the process runs (holiday list, meal allowance) and
the identity of the current viewer are passed to services through these
objects instead of living in module globals. ``AppContext`` loads its settings
lazily and reloads them after ``invalidate()`` or once the TTL has elapsed.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from .common.datetime_utils import now_utc
from .core.constants import DEFAULT_MEAL_ALLOWANCE
from .core.enums import ClockOutPolicy
from .rules.holidays import HolidayCalendar, load_holiday_calendar

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppSettings:
    holidays: HolidayCalendar
    clock_out_policy: ClockOutPolicy = ClockOutPolicy.AUTO_DERIVED
    meal_allowance_amount: float = DEFAULT_MEAL_ALLOWANCE

    @classmethod
    def from_module(cls, settings) -> "AppSettings":
        return cls(
            holidays=load_holiday_calendar(getattr(settings, "HOLIDAYS_FILE", None) or None),
            clock_out_policy=ClockOutPolicy(str(getattr(settings, "CLOCKOUT_POLICY", "auto")).lower()),
            meal_allowance_amount=float(getattr(settings, "MEAL_ALLOWANCE_AMOUNT", DEFAULT_MEAL_ALLOWANCE)),
        )


class AppContext:
    def __init__(
        self,
        loader: Callable[[], AppSettings],
        *,
        ttl: Optional[timedelta] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._loader = loader
        self._ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._settings: Optional[AppSettings] = None
        self._loaded_at: Optional[datetime] = None

    @classmethod
    def static(cls, settings: AppSettings) -> "AppContext":
        return cls(lambda: settings)

    @property
    def loaded_at(self) -> Optional[datetime]:
        return self._loaded_at

    def is_stale(self) -> bool:
        if self._settings is None:
            return True
        if self._ttl is None:
            return False
        return self._clock() - self._loaded_at >= self._ttl

    @property
    def settings(self) -> AppSettings:
        if self.is_stale():
            self.refresh()
        return self._settings

    def refresh(self) -> AppSettings:
        with self._lock:
            self._settings = self._loader()
            self._loaded_at = self._clock()
        logger.debug("Settings reloaded at %s", self._loaded_at.isoformat())
        return self._settings

    def invalidate(self) -> None:
        with self._lock:
            self._settings = None
            self._loaded_at = None


@dataclass(frozen=True)
class SessionContext:
    """Who is looking: reminders and dismissals are evaluated per viewer."""

    viewer_id: str
    app: AppContext
    viewer_name: Optional[str] = None
