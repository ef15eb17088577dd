from __future__ import annotations

import logging

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError, ValidationError
from .model import Principal
from .repository import EmployeeRepository

log = logging.getLogger(__name__)


class AuthService:
    """Use case: log an employee in."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, code: str, password: str) -> Principal:
        try:
            code = require_non_empty(code, "Employee code")
        except ValidationError:
            raise AuthenticationError("Invalid employee code or password")

        employee = self._employees.get_by_code(code)
        if not employee or employee.delete_flg:
            log.info("login rejected for unknown employee %s", code)
            raise AuthenticationError("Invalid employee code or password")

        try:
            ok = check_password_hash(employee.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            log.info("login rejected for employee %s", code)
            raise AuthenticationError("Invalid employee code or password")

        return Principal(employee_code=employee.code, name=employee.name, role=employee.role)
