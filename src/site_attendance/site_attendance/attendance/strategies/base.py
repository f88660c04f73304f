from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ..model import HoursDecision


class ClockOutStrategy(ABC):
    """Strategy Pattern: encapsulate how clock-out hours are proposed."""

    @abstractmethod
    def decide(self, *, clock_in_time: datetime, now: datetime) -> HoursDecision:
        raise NotImplementedError
