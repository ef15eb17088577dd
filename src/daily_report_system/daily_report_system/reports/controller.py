from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.auth import login_required
from ..container import Container
from ..core.enums import ErrorKinds
from ..core.exceptions import DataIntegrityError
from ..core.messages import ErrorMessage
from ..employees.model import Principal
from .forms import ReportForm
from .model import Report

log = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def _not_found(principal: Principal, message: Optional[str] = None):
        return (
            render_template(
                "404.html",
                logged_in_user_name=principal.name,
                message=message or ErrorMessage.get_error_value(ErrorKinds.NOT_FOUND),
            ),
            404,
        )

    def _render_form(template: str, principal: Principal, form: ReportForm, *, errors=None, status: int = 200, **model):
        return (
            render_template(
                template,
                report=form,
                errors=errors or {},
                logged_in_user_name=principal.name,
                **model,
            ),
            status,
        )

    def _submit(principal: Principal, form: ReportForm, action):
        """Run ``action`` on the validated report; return error model on failure, ``None`` on success."""
        report = form.to_report(employee_code=principal.employee_code)
        try:
            result = action(report)
        except DataIntegrityError as e:
            log.warning("report write rejected by storage: %s", e)
            return ErrorMessage.as_model(ErrorKinds.DUPLICATE_EXCEPTION_ERROR)

        if ErrorMessage.contains(result):
            return ErrorMessage.as_model(result)
        return None

    @app.route("/reports", methods=["GET"], endpoint="reports_list")
    @login_required
    def reports_list(principal: Principal):
        reports = service.list_for(principal)
        return render_template(
            "reports/list.html",
            report_list=reports,
            list_size=len(reports),
            logged_in_user_name=principal.name,
            is_admin=principal.is_admin,
        )

    @app.route("/reports/<int:report_id>/", methods=["GET"], endpoint="reports_detail")
    @login_required
    def reports_detail(principal: Principal, report_id: int):
        report = service.find_by_code(report_id)
        if report is None:
            return _not_found(principal)
        return render_template("reports/detail.html", report=report, logged_in_user_name=principal.name)

    @app.route("/reports/add", methods=["GET", "POST"], endpoint="reports_create")
    @login_required
    def reports_create(principal: Principal):
        if request.method == "GET":
            return _render_form("reports/new.html", principal, ReportForm())

        form = ReportForm.from_mapping(request.form)
        errors = form.errors()
        if errors:
            return _render_form("reports/new.html", principal, form, errors=errors, status=400)

        try:
            error_model = _submit(principal, form, service.save)
        except Exception:
            log.exception("unexpected error while creating a report")
            flash("System error while saving the report.", "danger")
            return _render_form("reports/new.html", principal, form, status=500)

        if error_model:
            return _render_form("reports/new.html", principal, form, status=400, **error_model)

        flash("Report saved.", "success")
        return redirect(url_for("reports_list"))

    @app.route("/reports/<int:report_id>/update", methods=["GET", "POST"], endpoint="reports_edit")
    @login_required
    def reports_edit(principal: Principal, report_id: int):
        if request.method == "GET":
            report = service.find_by_code(report_id)
            if report is None:
                return _not_found(principal)
            return _render_form("reports/update.html", principal, ReportForm.from_report(report))

        form = ReportForm.from_mapping(request.form, report_id=report_id)
        errors = form.errors()
        if errors:
            return _render_form("reports/update.html", principal, form, errors=errors, status=400)

        try:
            error_model = _submit(principal, form, service.update)
        except Exception:
            log.exception("unexpected error while updating report %s", report_id)
            flash("System error while saving the report.", "danger")
            return _render_form("reports/update.html", principal, form, status=500)

        if error_model and ErrorMessage.get_error_name(ErrorKinds.NOT_FOUND) in error_model:
            return _not_found(principal)
        if error_model:
            return _render_form("reports/update.html", principal, form, status=400, **error_model)

        flash("Report updated.", "success")
        return redirect(url_for("reports_list"))

    @app.route("/reports/<int:report_id>/delete", methods=["POST"], endpoint="reports_delete")
    @login_required
    def reports_delete(principal: Principal, report_id: int):
        try:
            result = service.delete(report_id)
        except DataIntegrityError as e:
            log.warning("delete of report %s rejected by storage: %s", report_id, e)
            result = ErrorKinds.DUPLICATE_EXCEPTION_ERROR
        except Exception:
            log.exception("unexpected error while deleting report %s", report_id)
            flash("System error while deleting the report.", "danger")
            return redirect(url_for("reports_detail", report_id=report_id))

        if ErrorMessage.contains(result):
            report: Optional[Report] = service.find_by_code(report_id)
            if report is None:
                return _not_found(principal, ErrorMessage.get_error_value(result))
            return (
                render_template(
                    "reports/detail.html",
                    report=report,
                    logged_in_user_name=principal.name,
                    **ErrorMessage.as_model(result),
                ),
                400,
            )

        flash("Report deleted.", "success")
        return redirect(url_for("reports_list"))
