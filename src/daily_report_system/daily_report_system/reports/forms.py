from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Mapping, Optional

from ..common.validators import require_iso_date, require_max_length, require_non_empty
from ..core.constants import CONTENT_MAX_LENGTH, DATE_FORMAT, TITLE_MAX_LENGTH
from ..core.exceptions import ValidationError
from .model import Report


@dataclass
class ReportForm:
    """Submitted report fields, kept as raw strings so a rejected form can be re-rendered as typed.

    Only date, title and content are read from the request; ownership and
    timestamps are never taken from the client.
    """

    report_date: str = ""
    title: str = ""
    content: str = ""
    report_id: Optional[int] = None
    _parsed_date: Optional[date] = field(default=None, init=False, repr=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, str], *, report_id: Optional[int] = None) -> "ReportForm":
        return cls(
            report_date=(data.get("report_date") or "").strip(),
            title=data.get("title") or "",
            content=data.get("content") or "",
            report_id=report_id,
        )

    @classmethod
    def from_report(cls, report: Report) -> "ReportForm":
        return cls(
            report_date=report.report_date.strftime(DATE_FORMAT),
            title=report.title,
            content=report.content,
            report_id=report.report_id,
        )

    def errors(self) -> Dict[str, str]:
        """Per-field messages; empty when the form is valid."""
        errors: Dict[str, str] = {}

        try:
            self._parsed_date = require_iso_date(self.report_date, "Date")
        except ValidationError as e:
            errors["report_date"] = str(e)

        try:
            require_max_length(require_non_empty(self.title, "Title"), "Title", TITLE_MAX_LENGTH)
        except ValidationError as e:
            errors["title"] = str(e)

        try:
            require_max_length(require_non_empty(self.content, "Content"), "Content", CONTENT_MAX_LENGTH)
        except ValidationError as e:
            errors["content"] = str(e)

        return errors

    def to_report(self, *, employee_code: str) -> Report:
        if self._parsed_date is None:
            self._parsed_date = require_iso_date(self.report_date, "Date")
        return Report(
            report_id=self.report_id,
            report_date=self._parsed_date,
            title=self.title.strip(),
            content=self.content.strip(),
            employee_code=employee_code,
        )
