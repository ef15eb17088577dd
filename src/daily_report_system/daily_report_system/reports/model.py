from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Report:
    """One employee's daily report.

    ``employee_code`` is always assigned by the server from the logged-in
    principal or carried over from the stored record.
    """

    report_id: Optional[int]
    report_date: date
    title: str
    content: str
    employee_code: str
    delete_flg: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    # joined from employees for display only
    employee_name: Optional[str] = None
