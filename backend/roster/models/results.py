"""
Result Models - Timed outputs of sort and search operations.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from .student import Student


class SortRequest(BaseModel):
    """Sort request payload."""
    algorithm: Optional[str] = None  # falls back to settings.default_sort_algorithm
    key: str = "name"
    order: str = "asc"
    persist: bool = True  # False returns a sorted view without reordering


class SortResult(BaseModel):
    """Students in sorted order plus timing for the sort step alone."""
    algorithm: str
    key: str
    order: str
    students: List[Student]
    elapsed_ms: float = Field(..., ge=0)
    complexity: str


class SearchResult(BaseModel):
    """Matching students plus timing for the search step."""
    algorithm: str
    query: str
    students: List[Student]
    elapsed_ms: float = Field(..., ge=0)
    complexity: str


class RosterSummary(BaseModel):
    """Aggregate figures shown on the dashboard summary cards."""
    count: int
    average_score: float
