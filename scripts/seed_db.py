"""Create or refresh the demo admin/general employees."""
from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.daily_report_system.daily_report_system.database.bootstrap import DEMO_EMPLOYEES, ensure_demo_employees
from src.daily_report_system.daily_report_system.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level="INFO", format="%(levelname)s | %(message)s")

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_employees(db_config)

    print(f"OK: Seeded database -> {DBConfig.from_mapping(db_config).describe()}")
    for code, name, role, password in DEMO_EMPLOYEES:
        print(f"  {code} / {password} ({name}, {role.value})")


if __name__ == "__main__":
    main()
