from __future__ import annotations

from dataclasses import replace

import pytest
from werkzeug.security import generate_password_hash

from src.daily_report_system.daily_report_system.core.enums import Role
from src.daily_report_system.daily_report_system.core.exceptions import AuthenticationError
from src.daily_report_system.daily_report_system.employees.model import Employee
from src.daily_report_system.daily_report_system.employees.service import AuthService


class InMemoryEmployeeRepo:
    def __init__(self, *employees: Employee):
        self._by_code = {e.code: e for e in employees}

    def get_by_code(self, code):
        return self._by_code.get(code)


HASH = generate_password_hash("secret123")
ALICE = Employee(code="A", name="Alice", role=Role.GENERAL, password_hash=HASH)


def test_authenticate_returns_principal():
    svc = AuthService(InMemoryEmployeeRepo(ALICE))

    principal = svc.authenticate("A", "secret123")

    assert (principal.employee_code, principal.name, principal.role) == ("A", "Alice", Role.GENERAL)
    assert principal.is_admin is False


@pytest.mark.parametrize("code,password", [("A", "wrong"), ("Z", "secret123"), ("", "secret123")])
def test_authenticate_rejects_bad_credentials(code, password):
    svc = AuthService(InMemoryEmployeeRepo(ALICE))

    with pytest.raises(AuthenticationError):
        svc.authenticate(code, password)


def test_authenticate_rejects_soft_deleted_employee():
    svc = AuthService(InMemoryEmployeeRepo(replace(ALICE, delete_flg=True)))

    with pytest.raises(AuthenticationError):
        svc.authenticate("A", "secret123")


def test_authenticate_tolerates_placeholder_hash():
    svc = AuthService(InMemoryEmployeeRepo(replace(ALICE, password_hash="CHANGE_ME")))

    with pytest.raises(AuthenticationError):
        svc.authenticate("A", "secret123")


def test_login_route_stores_principal_and_redirects(client, employees):
    employees._by_code["A"] = replace(employees._by_code["A"], password_hash=HASH)

    resp = client.post("/login?next=/reports/add", data={"code": "A", "password": "secret123"})

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/reports/add")
    with client.session_transaction() as sess:
        assert (sess["employee_code"], sess["role"]) == ("A", "GENERAL")


def test_login_route_rejects_bad_password(client):
    resp = client.post("/login", data={"code": "A", "password": "nope"})

    assert resp.status_code == 401
    assert "Invalid employee code or password" in resp.get_data(as_text=True)


def test_login_ignores_offsite_next(client, employees):
    employees._by_code["A"] = replace(employees._by_code["A"], password_hash=HASH)

    resp = client.post("/login?next=//evil.example", data={"code": "A", "password": "secret123"})

    assert resp.headers["Location"].endswith("/reports")


def test_logout_clears_session(client, login, alice):
    login(alice)

    client.get("/logout")

    assert client.get("/reports").status_code == 302
