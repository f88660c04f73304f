from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import RateType, WorkerType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_float
from .model import Worker
from .repository import WorkerRepository

_COLUMNS = """
    id, name, worker_type, rate_type, salary, levy_rate, nationality, pass_expiry_date,
    show_in_supervisor_app, cpf_amount, employee_cpf, occupation_title, is_excluded_from_payroll
"""


def _row_to_worker(r: dict) -> Worker:
    return Worker(
        id=str(r["id"]),
        name=r["name"],
        worker_type=WorkerType(r["worker_type"]),
        rate_type=RateType(r["rate_type"]),
        salary=float(r.get("salary") or 0),
        levy_rate=optional_float(r.get("levy_rate")),
        nationality=r.get("nationality"),
        pass_expiry_date=r.get("pass_expiry_date"),
        show_in_supervisor_app=bool(r.get("show_in_supervisor_app", True)),
        cpf_amount=optional_float(r.get("cpf_amount")),
        employee_cpf=optional_float(r.get("employee_cpf")),
        occupation_title=r.get("occupation_title") or "",
        is_excluded_from_payroll=bool(r.get("is_excluded_from_payroll", False)),
    )


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers WHERE id=%s", (worker_id,))
            r = fetchone(cur)
            return _row_to_worker(r) if r else None

    def list_all(self) -> Sequence[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers ORDER BY name ASC")
            return [_row_to_worker(r) for r in fetchall(cur)]

    def upsert(self, worker: Worker) -> Worker:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO workers(
                    id, name, worker_type, rate_type, salary, levy_rate, nationality, pass_expiry_date,
                    show_in_supervisor_app, cpf_amount, employee_cpf, occupation_title, is_excluded_from_payroll
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), worker_type=VALUES(worker_type), rate_type=VALUES(rate_type),
                    salary=VALUES(salary), levy_rate=VALUES(levy_rate), nationality=VALUES(nationality),
                    pass_expiry_date=VALUES(pass_expiry_date),
                    show_in_supervisor_app=VALUES(show_in_supervisor_app),
                    cpf_amount=VALUES(cpf_amount), employee_cpf=VALUES(employee_cpf),
                    occupation_title=VALUES(occupation_title),
                    is_excluded_from_payroll=VALUES(is_excluded_from_payroll)
                """,
                (
                    worker.id,
                    worker.name,
                    worker.worker_type.value,
                    worker.rate_type.value,
                    worker.salary,
                    worker.levy_rate,
                    worker.nationality,
                    worker.pass_expiry_date,
                    int(worker.show_in_supervisor_app),
                    worker.cpf_amount,
                    worker.employee_cpf,
                    worker.occupation_title,
                    int(worker.is_excluded_from_payroll),
                ),
            )
        return worker

    def delete(self, worker_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM workers WHERE id=%s", (worker_id,))
            return cur.rowcount > 0
