"""Student Roster - in-memory student records with instrumented sort and search."""

__version__ = "1.0.0"
