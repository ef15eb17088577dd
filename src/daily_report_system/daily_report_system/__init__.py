"""Daily Report System package.

Employees submit, edit and delete one daily report per date; administrators
see every employee's reports. Organized by feature modules (employees,
reports) with a thin Flask controller layer over service/repository layers.
"""
from .main import create_app

__all__ = ["create_app"]
