from __future__ import annotations

from pathlib import Path

import pytest

from config import get_settings_module
from src.daily_report_system.daily_report_system.core.enums import ErrorKinds
from src.daily_report_system.daily_report_system.core.messages import ErrorMessage
from src.daily_report_system.daily_report_system.database.bootstrap import _strip_create_db_and_use, iter_sql_statements
from src.daily_report_system.daily_report_system.database.connection import DBConfig

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.mark.parametrize(
    "env,module",
    [("production", "config.production"), ("TEST", "config.testing"), ("anything", "config.development")],
)
def test_settings_module_follows_app_env(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == module


def test_schema_declares_unique_employee_date_key():
    sql = _strip_create_db_and_use((REPO_ROOT / "database" / "schema.sql").read_text(encoding="utf-8"))

    statements = list(iter_sql_statements(sql))

    assert len(statements) == 2
    assert "UNIQUE KEY uq_reports_employee_date (employee_code, report_date)" in statements[1]


def test_sql_splitter_ignores_semicolons_in_quotes():
    statements = list(iter_sql_statements("INSERT INTO t VALUES ('a;b');\n-- note; here\nSELECT 1"))

    assert statements == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]


def test_error_messages_cover_every_failure_kind():
    assert not ErrorMessage.contains(ErrorKinds.SUCCESS)
    for kind in (ErrorKinds.DATE_DUPLICATE, ErrorKinds.DUPLICATE_EXCEPTION_ERROR, ErrorKinds.NOT_FOUND):
        assert ErrorMessage.contains(kind)
        assert ErrorMessage.as_model(kind) == {ErrorMessage.get_error_name(kind): ErrorMessage.get_error_value(kind)}


def test_db_config_defaults():
    cfg = DBConfig.from_mapping({"host": "db", "password": "x"})

    assert cfg.describe() == "root@db:3306/daily_report_db"
