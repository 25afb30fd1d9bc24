"""
Roster errors.

All errors are raised synchronously at the offending call. The API layer
maps them to HTTP responses; nothing here is retried.
"""

from typing import Optional


class RosterError(Exception):
    """Base class for every error raised by the roster core."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(RosterError, ValueError):
    """
    Raised by StudentManager.add_student() when a field fails validation.

    Attributes:
        field: Name of the offending field (currently only 'code').
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(RosterError, LookupError):
    """Raised when no student carries the requested identifier."""

    def __init__(self, student_id: str) -> None:
        super().__init__(f"Student not found: {student_id}")
        self.student_id = student_id


class FormatError(RosterError, ValueError):
    """Raised when import text is not a JSON array of student records."""
