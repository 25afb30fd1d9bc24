"""Models module."""

from .student import Student, StudentCreate, StudentUpdate
from .results import SortRequest, SortResult, SearchResult, RosterSummary

__all__ = [
    'Student', 'StudentCreate', 'StudentUpdate',
    'SortRequest', 'SortResult', 'SearchResult', 'RosterSummary'
]
