from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.exceptions import DataIntegrityError, DuplicateReportDateError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import ER_DUP_ENTRY, ER_NO_REFERENCED_ROW_2, as_bool, db_cursor, fetchall, fetchone
from .model import Report
from .repository import ReportRepository

log = logging.getLogger(__name__)

_SELECT = """
    SELECT r.report_id, r.report_date, r.title, r.content, r.employee_code,
           r.delete_flg, r.created_at, r.updated_at, e.name AS employee_name
    FROM reports r
    JOIN employees e ON e.code = r.employee_code
"""


def _to_report(r: dict) -> Report:
    return Report(
        report_id=int(r["report_id"]),
        report_date=r["report_date"],
        title=r["title"],
        content=r["content"],
        employee_code=str(r["employee_code"]),
        delete_flg=as_bool(r["delete_flg"]),
        created_at=r["created_at"],
        updated_at=r["updated_at"],
        employee_name=r.get("employee_name"),
    )


@contextmanager
def _integrity_errors(report: Report):
    try:
        yield
    except mysql_errors.IntegrityError as e:
        if e.errno == ER_DUP_ENTRY:
            raise DuplicateReportDateError(
                f"employee {report.employee_code} already has a report on {report.report_date}"
            ) from e
        if e.errno == ER_NO_REFERENCED_ROW_2:
            raise DataIntegrityError(f"employee {report.employee_code} does not exist") from e
        raise DataIntegrityError(str(e)) from e


def _require_active_employee(cur, employee_code: str) -> None:
    # lock the employee row so a concurrent soft delete waits for us
    cur.execute(
        "SELECT code FROM employees WHERE code=%s AND delete_flg=FALSE FOR SHARE",
        (str(employee_code),),
    )
    if not fetchone(cur):
        raise DataIntegrityError(f"employee {employee_code} does not exist or was deleted")


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, report: Report) -> int:
        with _integrity_errors(report), db_cursor(self._conn_factory) as (_, cur):
            _require_active_employee(cur, report.employee_code)
            cur.execute(
                """
                INSERT INTO reports(
                    report_date, title, content, employee_code, delete_flg, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    report.report_date,
                    report.title,
                    report.content,
                    str(report.employee_code),
                    bool(report.delete_flg),
                    report.created_at,
                    report.updated_at,
                ),
            )
            return int(cur.lastrowid)

    def update(self, report: Report) -> bool:
        with _integrity_errors(report), db_cursor(self._conn_factory) as (_, cur):
            _require_active_employee(cur, report.employee_code)
            cur.execute(
                """
                UPDATE reports
                SET report_date=%s, title=%s, content=%s, employee_code=%s,
                    delete_flg=%s, created_at=%s, updated_at=%s
                WHERE report_id=%s
                """,
                (
                    report.report_date,
                    report.title,
                    report.content,
                    str(report.employee_code),
                    bool(report.delete_flg),
                    report.created_at,
                    report.updated_at,
                    int(report.report_id),
                ),
            )
            if cur.rowcount > 0:
                return True

            # rowcount is 0 when nothing changed; tell that apart from a missing row.
            cur.execute("SELECT report_id FROM reports WHERE report_id=%s", (int(report.report_id),))
            return fetchone(cur) is not None

    def delete(self, report_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM reports WHERE report_id=%s", (int(report_id),))
            return cur.rowcount > 0

    def find_by_id(self, report_id: int) -> Optional[Report]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE r.report_id=%s AND r.delete_flg=FALSE", (int(report_id),))
            r = fetchone(cur)
            return _to_report(r) if r else None

    def find_all(self) -> Sequence[Report]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE r.delete_flg=FALSE ORDER BY r.report_id ASC")
            return [_to_report(r) for r in fetchall(cur)]

    def find_by_employee(self, employee_code: str) -> Sequence[Report]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE r.employee_code=%s AND r.delete_flg=FALSE ORDER BY r.report_id ASC",
                (str(employee_code),),
            )
            return [_to_report(r) for r in fetchall(cur)]
