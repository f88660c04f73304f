from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import RateType


@dataclass(frozen=True)
class PayrollSummary:
    """Read-model: one worker's accrual for a calendar month (never stored)."""

    worker_id: str
    worker_name: str
    rate_type: RateType
    hourly_rate: float
    total_normal_hours: float = 0.0
    ot15_hours: float = 0.0
    ot20_hours: float = 0.0
    normal_pay: float = 0.0
    ot15_pay: float = 0.0
    ot20_pay: float = 0.0
    days_worked: int = 0
    meal_allowance_count: int = 0
    meal_allowance_total: float = 0.0
    transport_claim_total: float = 0.0

    @property
    def total_ot_hours(self) -> float:
        return self.ot15_hours + self.ot20_hours

    @property
    def ot_pay(self) -> float:
        return self.ot15_pay + self.ot20_pay

    @property
    def total_pay(self) -> float:
        return self.normal_pay + self.ot_pay

    def to_dict(self) -> dict:
        return {
            "employeeId": self.worker_id,
            "employeeName": self.worker_name,
            "rateType": self.rate_type.value,
            "hourlyRateUsed": round(self.hourly_rate, 2),
            "totalNormalHours": round(self.total_normal_hours, 2),
            "ot15Hours": round(self.ot15_hours, 2),
            "ot20Hours": round(self.ot20_hours, 2),
            "normalPay": round(self.normal_pay, 2),
            "ot15Pay": round(self.ot15_pay, 2),
            "ot20Pay": round(self.ot20_pay, 2),
            "otPay": round(self.ot_pay, 2),
            "totalPay": round(self.total_pay, 2),
            "daysWorked": self.days_worked,
            "mealAllowanceCount": self.meal_allowance_count,
            "mealAllowanceTotal": round(self.meal_allowance_total, 2),
            "transportClaimTotal": round(self.transport_claim_total, 2),
        }
