from datetime import date

from src.daily_report_system.daily_report_system.reports.forms import ReportForm


def test_valid_form_builds_report_owned_by_given_employee():
    form = ReportForm.from_mapping(
        {
            "report_date": "2024-01-10",
            "title": "  Sprint work ",
            "content": "Fixed bugs",
            "employee_code": "SOMEONE_ELSE",
        }
    )

    assert form.errors() == {}
    report = form.to_report(employee_code="A")

    assert report.report_date == date(2024, 1, 10)
    assert report.title == "Sprint work"
    assert report.employee_code == "A"
    assert report.report_id is None


def test_missing_fields_are_reported_per_field():
    errors = ReportForm.from_mapping({}).errors()

    assert set(errors) == {"report_date", "title", "content"}


def test_malformed_date_is_rejected():
    form = ReportForm.from_mapping({"report_date": "10/01/2024", "title": "t", "content": "c"})

    assert set(form.errors()) == {"report_date"}


def test_length_limits():
    form = ReportForm.from_mapping({"report_date": "2024-01-10", "title": "x" * 101, "content": "y" * 601})

    errors = form.errors()
    assert "100" in errors["title"]
    assert "600" in errors["content"]


def test_blank_title_is_rejected():
    form = ReportForm.from_mapping({"report_date": "2024-01-10", "title": "   ", "content": "c"})

    assert set(form.errors()) == {"title"}


def test_rejected_form_keeps_submitted_values():
    form = ReportForm.from_mapping({"report_date": "bad", "title": "My title", "content": "My content"}, report_id=7)

    form.errors()

    assert (form.report_date, form.title, form.content, form.report_id) == ("bad", "My title", "My content", 7)
