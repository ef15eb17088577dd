from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchone
from .model import Employee
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_code(self, code: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT code, name, role, password_hash, delete_flg
                FROM employees
                WHERE code=%s AND delete_flg=FALSE
                """,
                (str(code),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Employee(
                code=str(r["code"]),
                name=r["name"],
                role=Role(r["role"]),
                password_hash=r["password_hash"],
                delete_flg=as_bool(r["delete_flg"]),
            )
