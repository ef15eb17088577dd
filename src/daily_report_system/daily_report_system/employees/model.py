from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Employee owning daily reports.

    Managed by the surrounding employee system; read-only here.
    """

    code: str
    name: str
    role: Role
    password_hash: str
    delete_flg: bool = False


@dataclass(frozen=True)
class Principal:
    """Identity of the logged-in employee for the current request."""

    employee_code: str
    name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
