from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Permission tier of an employee."""

    GENERAL = "GENERAL"
    ADMIN = "ADMIN"


class ErrorKinds(str, Enum):
    """Outcome codes returned by the report service."""

    SUCCESS = "SUCCESS"
    DATE_DUPLICATE = "DATE_DUPLICATE"
    DUPLICATE_EXCEPTION_ERROR = "DUPLICATE_EXCEPTION_ERROR"
    NOT_FOUND = "NOT_FOUND"
