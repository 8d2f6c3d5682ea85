"""
Service error taxonomy. Each error carries the HTTP status it maps to,
so handlers and the app-level exception handler stay declarative.
"""


class StudentsAPIError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None, status_code: int | None = None) -> None:
        self.detail = detail or self.default_detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.detail)


class InvalidInputError(StudentsAPIError):
    """Malformed request body or path parameter."""

    status_code = 400
    default_detail = "Invalid request body"


class NotFoundError(StudentsAPIError):
    """No record matches the requested identifier."""

    status_code = 404
    default_detail = "Student not found"


class StoreError(StudentsAPIError):
    """The relational store rejected or failed a statement."""

    status_code = 500
    default_detail = "Database operation failed"


class ConnectivityError(StudentsAPIError):
    """The relational store is unreachable."""

    status_code = 503
    default_detail = "Database unreachable"
