from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import optional_date
from ..common.validators import as_bool, require_non_empty, require_non_negative
from ..core.constants import OFFICE_KEYWORDS
from ..core.enums import RateType, WorkerType
from ..core.exceptions import ValidationError


def _optional_amount(value: Any, field_name: str) -> Optional[float]:
    if value in (None, ""):
        return None
    return require_non_negative(value, field_name)


@dataclass(frozen=True)
class Worker:
    """Domain entity: a person eligible for site work.

    Foreign-only fields (levy, pass expiry) and local-only fields (CPF) are
    optional; ``from_dict`` is the single place where loose JSON records are
    checked and defaulted.
    """

    id: str
    name: str
    worker_type: WorkerType = WorkerType.LOCAL
    rate_type: RateType = RateType.MONTHLY
    salary: float = 0.0
    levy_rate: Optional[float] = None
    nationality: Optional[str] = None
    pass_expiry_date: Optional[date] = None
    show_in_supervisor_app: bool = True
    cpf_amount: Optional[float] = None
    employee_cpf: Optional[float] = None
    occupation_title: str = ""
    is_excluded_from_payroll: bool = False

    @property
    def is_foreign(self) -> bool:
        return self.worker_type == WorkerType.FOREIGN

    @property
    def is_office_staff(self) -> bool:
        title = (self.occupation_title or "").upper()
        return any(keyword in title for keyword in OFFICE_KEYWORDS)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Worker":
        try:
            worker_type = WorkerType(str(data.get("workerType") or WorkerType.LOCAL.value).upper())
            rate_type = RateType(str(data.get("rateType") or RateType.MONTHLY.value).upper())
        except ValueError as e:
            raise ValidationError(str(e))

        return cls(
            id=require_non_empty(data.get("id"), "Worker id"),
            name=require_non_empty(data.get("name"), "Worker name"),
            worker_type=worker_type,
            rate_type=rate_type,
            salary=require_non_negative(data.get("salary") or 0, "Salary"),
            levy_rate=_optional_amount(data.get("levyRate"), "Levy rate"),
            nationality=data.get("nationality") or None,
            pass_expiry_date=optional_date(data.get("passExpiryDate")),
            show_in_supervisor_app=as_bool(data.get("showInSupervisorApp", True)),
            cpf_amount=_optional_amount(data.get("cpfAmount"), "Employer CPF"),
            employee_cpf=_optional_amount(data.get("employeeCpf"), "Employee CPF"),
            occupation_title=str(data.get("occupationTitle") or ""),
            is_excluded_from_payroll=as_bool(data.get("isExcludedFromPayroll", False)),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "workerType": self.worker_type.value,
            "rateType": self.rate_type.value,
            "salary": self.salary,
            "levyRate": self.levy_rate,
            "nationality": self.nationality,
            "passExpiryDate": self.pass_expiry_date.isoformat() if self.pass_expiry_date else None,
            "showInSupervisorApp": self.show_in_supervisor_app,
            "cpfAmount": self.cpf_amount,
            "employeeCpf": self.employee_cpf,
            "occupationTitle": self.occupation_title,
            "isExcludedFromPayroll": self.is_excluded_from_payroll,
        }
