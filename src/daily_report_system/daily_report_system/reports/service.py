from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import ErrorKinds, Role
from ..core.exceptions import DuplicateReportDateError
from ..employees.model import Principal
from .model import Report
from .repository import ReportRepository

log = logging.getLogger(__name__)


class ReportService:
    """Use cases for daily reports.

    Mutations return an ``ErrorKinds`` outcome instead of raising for business
    rule violations. ``DataIntegrityError`` from the repository (dangling or
    soft-deleted employee) is left to the caller.
    """

    def __init__(self, reports: ReportRepository, *, clock: Callable[[], datetime] = now_local):
        self._reports = reports
        self._clock = clock

    def _has_date_conflict(self, employee_code: str, report_date: date, *, exclude_id: Optional[int] = None) -> bool:
        for existing in self._reports.find_by_employee(employee_code):
            if exclude_id is not None and existing.report_id == exclude_id:
                continue
            if existing.report_date == report_date:
                return True
        return False

    def save(self, report: Report) -> ErrorKinds:
        employee_code = require_non_empty(report.employee_code, "Employee")

        if self._has_date_conflict(employee_code, report.report_date):
            log.warning("report for %s on %s rejected: date already used", employee_code, report.report_date)
            return ErrorKinds.DATE_DUPLICATE

        now = self._clock()
        new_report = replace(
            report,
            report_id=None,
            employee_code=employee_code,
            delete_flg=False,
            created_at=now,
            updated_at=now,
        )

        try:
            report_id = self._reports.create(new_report)
        except DuplicateReportDateError:
            # a concurrent submission won the unique key
            log.warning("report for %s on %s rejected by unique key", employee_code, report.report_date)
            return ErrorKinds.DATE_DUPLICATE

        log.info("report %s created for %s on %s", report_id, employee_code, report.report_date)
        return ErrorKinds.SUCCESS

    def update(self, report: Report) -> ErrorKinds:
        if report.report_id is None:
            return ErrorKinds.NOT_FOUND

        stored = self.find_by_code(report.report_id)
        if stored is None:
            return ErrorKinds.NOT_FOUND

        # the stored owner decides which reports can collide
        if self._has_date_conflict(stored.employee_code, report.report_date, exclude_id=stored.report_id):
            log.warning(
                "update of report %s rejected: %s already used by %s",
                stored.report_id,
                report.report_date,
                stored.employee_code,
            )
            return ErrorKinds.DATE_DUPLICATE

        now = self._clock()
        updated = replace(
            report,
            report_id=stored.report_id,
            employee_code=stored.employee_code,
            created_at=stored.created_at,
            updated_at=max(now, stored.created_at) if stored.created_at else now,
            delete_flg=False,
        )

        try:
            found = self._reports.update(updated)
        except DuplicateReportDateError:
            log.warning("update of report %s rejected by unique key", stored.report_id)
            return ErrorKinds.DATE_DUPLICATE

        if not found:
            return ErrorKinds.NOT_FOUND

        log.info("report %s updated", stored.report_id)
        return ErrorKinds.SUCCESS

    def delete(self, report_id: int) -> ErrorKinds:
        report = self.find_by_code(report_id)
        if report is None:
            return ErrorKinds.NOT_FOUND

        if not self._reports.delete(report.report_id):
            return ErrorKinds.NOT_FOUND

        log.info("report %s deleted", report.report_id)
        return ErrorKinds.SUCCESS

    def find_all(self) -> Sequence[Report]:
        return self._reports.find_all()

    def find_by_code(self, report_id: int) -> Optional[Report]:
        return self._reports.find_by_id(int(report_id))

    def find_by_employee(self, employee_code: str) -> Sequence[Report]:
        return self._reports.find_by_employee(employee_code)

    def list_for(self, principal: Principal) -> Sequence[Report]:
        """Reports visible to ``principal``: everything for admins, own reports otherwise."""
        if principal.role == Role.ADMIN:
            return self.find_all()
        return self.find_by_employee(principal.employee_code)
