from __future__ import annotations

from enum import Enum


class RateType(str, Enum):
    """How a worker's configured salary amount is expressed."""

    MONTHLY = "MONTHLY"
    DAILY = "DAILY"
    HOURLY = "HOURLY"


class WorkerType(str, Enum):
    FOREIGN = "FOREIGN"
    LOCAL = "LOCAL"


class ProjectStatus(str, Enum):
    PLANNING = "PLANNING"
    ACTIVE = "ACTIVE"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class ReminderScope(str, Enum):
    """Audience of a reminder."""

    SELF = "SELF"
    ALL = "ALL"
    SPECIFIC = "SPECIFIC"


class ClockOutPolicy(str, Enum):
    """Which rule proposes the hours shown at the clock-out confirmation step."""

    AUTO_DERIVED = "auto"
    FIXED_DEFAULT = "fixed"
