class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class DataIntegrityError(DomainError):
    """Raised when storage rejects a write (dangling employee, broken key)."""


class DuplicateReportDateError(DataIntegrityError):
    """Raised when the (employee, report date) unique key is violated."""
