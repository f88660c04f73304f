from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date, parse_iso_instant, to_iso_instant
from ..common.validators import as_bool, require_non_empty, require_non_negative


@dataclass(frozen=True)
class ActiveClockIn:
    """Working-set entry: this worker is currently on site.

    ``version`` is bumped on every write so a clock-out can detect that another
    device replaced the entry in the meantime. ``token`` names one clock-in and
    survives edits; a new clock-in gets a new token while its version restarts.
    """

    worker_id: str
    clock_in_time: datetime
    project_id: str
    is_overnight: bool = False
    version: int = 1
    token: str = field(default="", compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ActiveClockIn":
        return cls(
            worker_id=require_non_empty(data.get("workerId"), "Worker id"),
            clock_in_time=parse_iso_instant(data.get("clockInTime")),
            project_id=require_non_empty(data.get("projectId"), "Project id"),
            is_overnight=as_bool(data.get("isOvernight", False)),
            version=int(data.get("version") or 1),
            token=str(data.get("token") or ""),
        )

    def to_dict(self) -> dict:
        return {
            "workerId": self.worker_id,
            "clockInTime": to_iso_instant(self.clock_in_time),
            "projectId": self.project_id,
            "isOvernight": self.is_overnight,
            "version": self.version,
            "token": self.token,
        }


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: a finalized unit of worked time (one per clock-out)."""

    id: str
    worker_id: str
    date: date
    normal_hours: float
    overtime_hours: float
    project_id: Optional[str] = None
    has_meal_allowance: bool = False
    transport_claim: float = 0.0
    remarks: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttendanceRecord":
        # ``hoursWorked`` is the legacy wire name for normal hours.
        normal = data.get("normalHours", data.get("hoursWorked", 0))
        return cls(
            id=require_non_empty(data.get("id"), "Attendance id"),
            worker_id=require_non_empty(data.get("employeeId", data.get("workerId")), "Worker id"),
            date=parse_iso_date(data.get("date")),
            normal_hours=require_non_negative(normal or 0, "Normal hours"),
            overtime_hours=require_non_negative(data.get("overtimeHours") or 0, "Overtime hours"),
            project_id=data.get("projectId") or None,
            has_meal_allowance=as_bool(data.get("hasMealAllowance", False)),
            transport_claim=require_non_negative(data.get("transportClaim") or 0, "Transport claim"),
            remarks=data.get("remarks") or None,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employeeId": self.worker_id,
            "date": self.date.isoformat(),
            "hoursWorked": self.normal_hours,
            "overtimeHours": self.overtime_hours,
            "projectId": self.project_id,
            "hasMealAllowance": self.has_meal_allowance,
            "transportClaim": self.transport_claim,
            "remarks": self.remarks,
        }


@dataclass(frozen=True)
class HoursDecision:
    normal_hours: float
    overtime_hours: float
    elapsed_hours: float
    lunch_deduction: float
    suggest_meal_allowance: bool = False
    anomaly: Optional[str] = None


@dataclass(frozen=True)
class ClockOutDraft:
    """Proposal shown on the confirmation step; every field may be overridden."""

    worker_id: str
    project_id: str
    date: date
    clock_in_time: datetime
    clock_out_time: datetime
    clock_in_version: int
    elapsed_hours: float
    lunch_deduction: float
    normal_hours: float
    overtime_hours: float
    has_meal_allowance: bool
    transport_claim: float = 0.0
    is_overnight: bool = False
    anomaly: Optional[str] = None
    clock_in_token: str = ""

    def to_dict(self) -> dict:
        return {
            "workerId": self.worker_id,
            "projectId": self.project_id,
            "date": self.date.isoformat(),
            "clockInTime": to_iso_instant(self.clock_in_time),
            "clockOutTime": to_iso_instant(self.clock_out_time),
            "clockInVersion": self.clock_in_version,
            "clockInToken": self.clock_in_token,
            "elapsedHours": self.elapsed_hours,
            "lunchDeduction": self.lunch_deduction,
            "normalHours": self.normal_hours,
            "otHours": self.overtime_hours,
            "hasMeal": self.has_meal_allowance,
            "transport": self.transport_claim,
            "isOvernight": self.is_overnight,
            "anomaly": self.anomaly,
        }
