from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import flash, g, redirect, request, session, url_for

from ..core.enums import Role
from ..employees.model import Principal

SESSION_KEYS = ("employee_code", "name", "role")


def store_principal(principal: Principal) -> None:
    session["employee_code"] = principal.employee_code
    session["name"] = principal.name
    session["role"] = principal.role.value


def current_principal() -> Optional[Principal]:
    """Build the request principal from the session (cached on ``flask.g``)."""
    if "principal" in g:
        return g.principal

    principal = None
    if all(key in session for key in SESSION_KEYS):
        try:
            principal = Principal(
                employee_code=str(session["employee_code"]),
                name=str(session["name"]),
                role=Role(session["role"]),
            )
        except ValueError:
            session.clear()

    g.principal = principal
    return principal


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        principal = current_principal()
        if principal is None:
            flash("Please log in to continue.", "warning")
            return redirect(url_for("login", next=request.path))
        return view(principal, *args, **kwargs)

    return wrapper
