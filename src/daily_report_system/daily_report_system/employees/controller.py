from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.auth import current_principal, store_principal
from ..core.exceptions import AuthenticationError
from ..container import Container

log = logging.getLogger(__name__)


def _safe_next(target: str | None) -> str:
    # only same-site relative paths
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return url_for("reports_list")


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return redirect(url_for("reports_list"))

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if current_principal() is not None:
            return redirect(url_for("reports_list"))

        if request.method == "POST":
            code = request.form.get("code", "")
            password = request.form.get("password", "")
            try:
                principal = container.auth_service.authenticate(code, password)
            except AuthenticationError as e:
                flash(str(e), "danger")
                return render_template("login.html", code=code), 401

            session.clear()
            session.permanent = bool(request.form.get("remember_me"))
            store_principal(principal)
            log.info("employee %s logged in", principal.employee_code)
            flash("Logged in.", "success")
            return redirect(_safe_next(request.args.get("next")))

        return render_template("login.html", code="")

    @app.route("/logout", methods=["GET", "POST"], endpoint="logout")
    def logout():
        session.clear()
        flash("Logged out.", "info")
        return redirect(url_for("login"))
