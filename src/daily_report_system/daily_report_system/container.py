from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .common.datetime_utils import now_local
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import AuthService
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    reports_repo: ReportRepository

    auth_service: AuthService
    report_service: ReportService


def build_services(
    *,
    employees_repo: EmployeeRepository,
    reports_repo: ReportRepository,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Wire services on top of any repository implementation (MySQL or in-memory)."""
    return Container(
        employees_repo=employees_repo,
        reports_repo=reports_repo,
        auth_service=AuthService(employees_repo),
        report_service=ReportService(reports_repo, clock=clock),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        reports_repo=MySQLReportRepository(conn),
    )
