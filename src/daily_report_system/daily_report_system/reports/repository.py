from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Report


class ReportRepository(Protocol):
    """Persistence for reports.

    Lookups never return rows whose delete_flg is set. ``create`` and
    ``update`` raise ``DuplicateReportDateError`` when the employee already
    has a report on that date and ``DataIntegrityError`` when the owning
    employee is missing or soft-deleted.
    """

    def create(self, report: Report) -> int:
        raise NotImplementedError

    def update(self, report: Report) -> bool:
        raise NotImplementedError

    def delete(self, report_id: int) -> bool:
        raise NotImplementedError

    def find_by_id(self, report_id: int) -> Optional[Report]:
        raise NotImplementedError

    def find_all(self) -> Sequence[Report]:
        raise NotImplementedError

    def find_by_employee(self, employee_code: str) -> Sequence[Report]:
        raise NotImplementedError
