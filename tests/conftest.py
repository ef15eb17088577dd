from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

import pytest

from src.daily_report_system.daily_report_system.container import build_services
from src.daily_report_system.daily_report_system.core.enums import Role
from src.daily_report_system.daily_report_system.core.exceptions import DataIntegrityError, DuplicateReportDateError
from src.daily_report_system.daily_report_system.employees.model import Employee
from src.daily_report_system.daily_report_system.main import create_app
from src.daily_report_system.daily_report_system.reports.model import Report
from src.daily_report_system.daily_report_system.reports.service import ReportService


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._by_code: dict[str, Employee] = {e.code: e for e in employees}

    def get_by_code(self, code: str) -> Optional[Employee]:
        employee = self._by_code.get(str(code))
        if employee is None or employee.delete_flg:
            return None
        return employee

    def soft_delete(self, code: str) -> None:
        self._by_code[code] = replace(self._by_code[code], delete_flg=True)


class InMemoryReports:
    """Mirrors the MySQL table: FK to active employees and UNIQUE(employee_code, report_date)."""

    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self._rows: dict[int, Report] = {}
        self._next_id = 1

    def _check(self, report: Report) -> Employee:
        employee = self._employees.get_by_code(report.employee_code)
        if employee is None:
            raise DataIntegrityError(f"employee {report.employee_code} does not exist or was deleted")
        for row in self._rows.values():
            if (
                row.report_id != report.report_id
                and row.employee_code == report.employee_code
                and row.report_date == report.report_date
            ):
                raise DuplicateReportDateError("duplicate (employee_code, report_date)")
        return employee

    def create(self, report: Report) -> int:
        employee = self._check(report)
        report_id = self._next_id
        self._next_id += 1
        self._rows[report_id] = replace(report, report_id=report_id, employee_name=employee.name)
        return report_id

    def update(self, report: Report) -> bool:
        if report.report_id not in self._rows:
            return False
        employee = self._check(report)
        self._rows[report.report_id] = replace(report, employee_name=employee.name)
        return True

    def delete(self, report_id: int) -> bool:
        return self._rows.pop(int(report_id), None) is not None

    def find_by_id(self, report_id: int) -> Optional[Report]:
        row = self._rows.get(int(report_id))
        if row is None or row.delete_flg:
            return None
        return row

    def find_all(self):
        return [r for _, r in sorted(self._rows.items()) if not r.delete_flg]

    def find_by_employee(self, employee_code: str):
        return [r for r in self.find_all() if r.employee_code == employee_code]

    # test helper: insert a row as-is
    def put(self, report: Report) -> Report:
        self._rows[report.report_id] = report
        self._next_id = max(self._next_id, report.report_id + 1)
        return report


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


EMPLOYEE_A = Employee(code="A", name="Alice", role=Role.GENERAL, password_hash="")
EMPLOYEE_B = Employee(code="B", name="Bob", role=Role.ADMIN, password_hash="")
EMPLOYEE_C = Employee(code="C", name="Carol", role=Role.GENERAL, password_hash="")


@pytest.fixture
def alice():
    return EMPLOYEE_A


@pytest.fixture
def bob():
    return EMPLOYEE_B


@pytest.fixture
def carol():
    return EMPLOYEE_C


@pytest.fixture
def employees():
    return InMemoryEmployees([EMPLOYEE_A, EMPLOYEE_B, EMPLOYEE_C])


@pytest.fixture
def reports_repo(employees):
    return InMemoryReports(employees)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 10, 9, 0, 0))


@pytest.fixture
def service(reports_repo, clock):
    return ReportService(reports_repo, clock=clock)


@pytest.fixture
def container(employees, reports_repo, clock):
    return build_services(employees_repo=employees, reports_repo=reports_repo, clock=clock)


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app({"SECRET_KEY": "test-secret", "TESTING": True}, container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(employee: Employee) -> None:
        with client.session_transaction() as sess:
            sess["employee_code"] = employee.code
            sess["name"] = employee.name
            sess["role"] = employee.role.value

    return _login
