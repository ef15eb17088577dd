from __future__ import annotations

from typing import Dict, Optional, Tuple

from .enums import ErrorKinds

# kind -> (template attribute, message shown next to the form)
_MESSAGES: Dict[ErrorKinds, Tuple[str, str]] = {
    ErrorKinds.DATE_DUPLICATE: (
        "report_date_error",
        "A report for this date already exists. Please choose another date.",
    ),
    ErrorKinds.DUPLICATE_EXCEPTION_ERROR: (
        "duplicate_error",
        "The report could not be saved because it conflicts with existing data.",
    ),
    ErrorKinds.NOT_FOUND: (
        "not_found_error",
        "The requested report does not exist.",
    ),
}


class ErrorMessage:
    """Lookup of user-facing messages for non-success service outcomes."""

    @staticmethod
    def contains(kind: Optional[ErrorKinds]) -> bool:
        return kind in _MESSAGES

    @staticmethod
    def get_error_name(kind: ErrorKinds) -> str:
        return _MESSAGES[kind][0]

    @staticmethod
    def get_error_value(kind: ErrorKinds) -> str:
        return _MESSAGES[kind][1]

    @classmethod
    def as_model(cls, kind: ErrorKinds) -> Dict[str, str]:
        return {cls.get_error_name(kind): cls.get_error_value(kind)}
