"""API module."""

from .students import router as students_router

__all__ = ['students_router']
