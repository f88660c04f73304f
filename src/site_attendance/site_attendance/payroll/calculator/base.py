from __future__ import annotations

from abc import ABC, abstractmethod

from ...workers.model import Worker


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def hourly_rate(self, worker: Worker) -> float:
        raise NotImplementedError
