from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .attendance.factory import ClockOutStrategyFactory
from .attendance.model import ActiveClockIn, AttendanceRecord
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.mysql_presence_repository import MySQLPresenceRepository
from .attendance.repository import AttendanceLedgerRepository, PresenceRepository
from .attendance.service import ClockService
from .context import AppContext
from .database.connection import DBConfig, DatabaseConnection
from .health.service import HealthService
from .payroll.service import PayrollService
from .projects.model import Project
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .reminders.model import Reminder
from .reminders.mysql_reminder_repository import MySQLReminderRepository
from .reminders.repository import ReminderRepository
from .reminders.service import ReminderService
from .sync.table_adapter import TableReplaceAdapter
from .workers.model import Worker
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.repository import WorkerRepository
from .workers.service import WorkerService


@dataclass(frozen=True)
class Container:
    context: AppContext

    workers_repo: WorkerRepository
    projects_repo: ProjectRepository
    presence_repo: PresenceRepository
    attendance_repo: AttendanceLedgerRepository
    reminders_repo: ReminderRepository

    worker_service: WorkerService
    clock_service: ClockService
    payroll_service: PayrollService
    reminder_service: ReminderService
    health_service: Optional[HealthService] = None

    tables: dict[str, TableReplaceAdapter] = field(default_factory=dict)


def build_tables(
    *,
    workers_repo: WorkerRepository,
    projects_repo: ProjectRepository,
    presence_repo: PresenceRepository,
    attendance_repo: AttendanceLedgerRepository,
    reminders_repo: ReminderRepository,
) -> dict[str, TableReplaceAdapter]:
    """Adapters serving the legacy ``GET/POST /api/<table>`` contract."""

    return {
        "workers": TableReplaceAdapter(
            "workers",
            parse=Worker.from_dict,
            key=lambda w: w.id,
            list_all=workers_repo.list_all,
            save=lambda w, _: workers_repo.upsert(w),
            delete=workers_repo.delete,
        ),
        "projects": TableReplaceAdapter(
            "projects",
            parse=Project.from_dict,
            key=lambda p: p.id,
            list_all=projects_repo.list_all,
            save=lambda p, _: projects_repo.upsert(p),
            delete=projects_repo.delete,
        ),
        "active_clockins": TableReplaceAdapter(
            "active_clockins",
            parse=ActiveClockIn.from_dict,
            key=lambda c: c.worker_id,
            list_all=presence_repo.list_all,
            save=lambda c, current: presence_repo.upsert(c, expected_version=current.version if current else None),
            delete=presence_repo.delete,
            versioned=True,
        ),
        "attendance": TableReplaceAdapter(
            "attendance",
            parse=AttendanceRecord.from_dict,
            key=lambda r: r.id,
            list_all=attendance_repo.list_all,
            save=lambda r, _: attendance_repo.append(r),
            delete=attendance_repo.delete,
            immutable=True,
        ),
        "reminders": TableReplaceAdapter(
            "reminders",
            parse=Reminder.from_dict,
            key=lambda r: r.id,
            list_all=reminders_repo.list_all,
            save=lambda r, current: reminders_repo.upsert(r, expected_version=current.version if current else None),
            delete=reminders_repo.delete,
            versioned=True,
        ),
    }


def wire_container(
    *,
    context: AppContext,
    workers_repo: WorkerRepository,
    projects_repo: ProjectRepository,
    presence_repo: PresenceRepository,
    attendance_repo: AttendanceLedgerRepository,
    reminders_repo: ReminderRepository,
    health_service: Optional[HealthService] = None,
) -> Container:
    strategy = ClockOutStrategyFactory().for_policy(context.settings.clock_out_policy)

    return Container(
        context=context,
        workers_repo=workers_repo,
        projects_repo=projects_repo,
        presence_repo=presence_repo,
        attendance_repo=attendance_repo,
        reminders_repo=reminders_repo,
        worker_service=WorkerService(workers_repo),
        clock_service=ClockService(presence_repo, attendance_repo, workers_repo, strategy=strategy),
        payroll_service=PayrollService(workers_repo, attendance_repo, context),
        reminder_service=ReminderService(reminders_repo),
        health_service=health_service,
        tables=build_tables(
            workers_repo=workers_repo,
            projects_repo=projects_repo,
            presence_repo=presence_repo,
            attendance_repo=attendance_repo,
            reminders_repo=reminders_repo,
        ),
    )


def build_container(*, db_config: dict, context: AppContext) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        context=context,
        workers_repo=MySQLWorkerRepository(conn),
        projects_repo=MySQLProjectRepository(conn),
        presence_repo=MySQLPresenceRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        reminders_repo=MySQLReminderRepository(conn),
        health_service=HealthService(conn),
    )
