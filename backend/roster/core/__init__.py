"""Core module - the student manager and its sorting/searching algorithms."""

from .exceptions import RosterError, ValidationError, NotFoundError, FormatError
from .student_manager import StudentManager

__all__ = ['StudentManager', 'RosterError', 'ValidationError', 'NotFoundError', 'FormatError']
