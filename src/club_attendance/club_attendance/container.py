from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .core.constants import DEFAULT_POOL_SIZE
from .core.settings import DailyTaskSettings
from .daily_task.clock import DailyTriggerClock
from .daily_task.scheduler import DailyScheduler
from .daily_task.seeders import AttendanceSeeder, StatusUpdateSeeder
from .daily_task.service import DailyBootstrapService
from .database.connection import DBConfig, DatabaseConnection
from .members.mysql_member_repository import MySQLMemberRepository
from .reports.service import AttendanceReportService
from .status_updates.mysql_status_update_repository import MySQLStatusUpdateRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    members_repo: MySQLMemberRepository
    attendance_repo: MySQLAttendanceRepository
    status_updates_repo: MySQLStatusUpdateRepository

    clock: DailyTriggerClock
    bootstrap_service: DailyBootstrapService
    scheduler: DailyScheduler
    report_service: AttendanceReportService


def build_container(*, db_config: dict, task_settings: DailyTaskSettings, pool_size: int = DEFAULT_POOL_SIZE) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(pool_size),
    )
    conn = DatabaseConnection.get_instance(config)

    members_repo = MySQLMemberRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    status_updates_repo = MySQLStatusUpdateRepository(conn)

    clock = DailyTriggerClock(task_settings.timezone, task_settings.trigger_time)
    bootstrap_service = DailyBootstrapService(
        members_repo,
        [AttendanceSeeder(attendance_repo), StatusUpdateSeeder(status_updates_repo)],
    )
    scheduler = DailyScheduler(clock, bootstrap_service)
    report_service = AttendanceReportService(attendance_repo, today_fn=clock.today)

    return Container(
        conn=conn,
        members_repo=members_repo,
        attendance_repo=attendance_repo,
        status_updates_repo=status_updates_repo,
        clock=clock,
        bootstrap_service=bootstrap_service,
        scheduler=scheduler,
        report_service=report_service,
    )
