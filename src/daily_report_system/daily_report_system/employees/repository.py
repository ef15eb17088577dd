from __future__ import annotations

from typing import Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    """Read access to employees.

    Soft-deleted employees (delete_flg=1) are never returned.
    """

    def get_by_code(self, code: str) -> Optional[Employee]:
        raise NotImplementedError
