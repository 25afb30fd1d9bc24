"""
Shared test fixtures and configuration.
"""

import pytest
import os

# Set test environment variables before importing roster modules
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("DEBUG", "true")

from roster.core import StudentManager


SAMPLE_STUDENTS = [
    {"id": "s1", "name": "Budi Santoso", "code": "2101001", "category": "Informatics", "score": 3.2},
    {"id": "s2", "name": "Alice Smith", "code": "2101002", "category": "Mathematics", "score": 3.8},
    {"id": "s3", "name": "SMITHERS", "code": "2101003", "category": "Physics", "score": 2.9},
    {"id": "s4", "name": "Citra Dewi", "code": "2101004", "category": "Informatics", "score": 3.8},
    {"id": "s5", "name": "Dani Pratama", "code": "2101005", "category": "Biology", "score": 3.2},
]


@pytest.fixture
def sample_data():
    return [dict(s) for s in SAMPLE_STUDENTS]


@pytest.fixture
def manager(sample_data):
    return StudentManager(sample_data)
