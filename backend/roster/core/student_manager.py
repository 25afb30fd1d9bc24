"""
Student Manager - Owns the in-memory roster.

The manager is the only component that mutates the collection. Reads hand
out copies of the records, so callers change a student only through
update_student(). Sorting through reorder_by() rewrites the canonical
order; sorted_view() computes the same ordering without keeping it.
"""

import json
import logging
import re
import threading
import time
import uuid
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..models import Student, StudentCreate, StudentUpdate, SortResult, SearchResult, RosterSummary
from .algorithms import (
    COMPLEXITY_LABELS,
    SORT_STRATEGIES,
    SearchAlgorithm,
    SortAlgorithm,
    SortKey,
    SortOrder,
    binary_search,
    linear_search,
    merge_sort,
)
from .exceptions import FormatError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Registration codes (NIM) are ASCII digits only
CODE_PATTERN = re.compile(r"[0-9]+")

UPDATABLE_FIELDS = ("name", "code", "category", "score")


def _generate_id() -> str:
    return uuid.uuid4().hex[:9]


def _parse_records(entries: Iterable[Any]) -> List[Student]:
    """Build students from plain data bags, raising FormatError on bad shape."""
    students = []
    for index, entry in enumerate(entries):
        if isinstance(entry, Student):
            students.append(entry.model_copy())
            continue
        if not isinstance(entry, dict):
            raise FormatError(f"Entry {index} is not an object")
        try:
            students.append(Student.from_dict(entry))
        except PydanticValidationError as e:
            raise FormatError(f"Entry {index} is not a valid student record: {e}") from e
    return students


class StudentManager:
    """
    Manages the ordered collection of student records.

    All operations are synchronous and run under one lock, since sorting
    reads and rewrites the whole collection.
    """

    def __init__(self, initial_data: Optional[Iterable[Union[Dict[str, Any], Student]]] = None):
        """
        Initialize the manager.

        Args:
            initial_data: Optional student bags or Student objects, kept in order
        """
        self._students: List[Student] = _parse_records(initial_data or [])
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._students)

    def _find(self, student_id: str) -> Student:
        for student in self._students:
            if student.id == student_id:
                return student
        raise NotFoundError(student_id)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def get_students(self) -> List[Student]:
        """Return copies of all students in current order."""
        with self._lock:
            return [s.model_copy() for s in self._students]

    def get_student(self, student_id: str) -> Student:
        """
        Return a copy of one student.

        Raises:
            NotFoundError: If no student has that id
        """
        with self._lock:
            return self._find(student_id).model_copy()

    def add_student(self, data: Union[Dict[str, Any], StudentCreate]) -> Student:
        """
        Append a new student to the end of the roster.

        Args:
            data: Student fields; a missing or empty id is generated

        Returns:
            Student: Copy of the created student

        Raises:
            ValidationError: If the registration code is not all digits,
                or a required field is missing
        """
        if isinstance(data, StudentCreate):
            data = data.model_dump()
        data = dict(data)

        code = data.get("code", data.get("nim"))
        if not isinstance(code, str) or not CODE_PATTERN.fullmatch(code):
            raise ValidationError("Invalid registration code: must contain digits only", field="code")

        if not data.get("id"):
            data["id"] = _generate_id()

        try:
            student = Student.from_dict(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid student data: {e}") from e

        with self._lock:
            self._students.append(student)
            total = len(self._students)

        logger.info(
            f"Student added: {student.id}",
            extra={"extra_fields": {"student_id": student.id, "total": total}}
        )
        return student.model_copy()

    def update_student(self, student_id: str, partial: Union[Dict[str, Any], StudentUpdate]) -> Student:
        """
        Overwrite the supplied fields of one student in place.

        A field counts as supplied when it is present and not None, so
        a score of 0 or an empty category are applied. The id never changes.

        Args:
            student_id: Student to update
            partial: Fields to overwrite

        Returns:
            Student: Copy of the updated student

        Raises:
            NotFoundError: If no student has that id
        """
        if isinstance(partial, StudentUpdate):
            partial = partial.model_dump(exclude_none=True)
        changes = {
            field: value for field, value in partial.items()
            if field in UPDATABLE_FIELDS and value is not None
        }

        with self._lock:
            student = self._find(student_id)
            for field, value in changes.items():
                setattr(student, field, value)
            updated = student.model_copy()

        logger.info(
            f"Student updated: {student_id}",
            extra={"extra_fields": {"student_id": student_id, "fields": sorted(changes)}}
        )
        return updated

    def delete_student(self, student_id: str) -> int:
        """
        Remove every student with the given id.

        Returns:
            int: Number of students removed (0 if the id is unknown)
        """
        with self._lock:
            before = len(self._students)
            self._students = [s for s in self._students if s.id != student_id]
            removed = before - len(self._students)

        if removed:
            logger.info(f"Student deleted: {student_id}")
        else:
            logger.debug(f"Delete ignored, no student with id {student_id}")
        return removed

    # ------------------------------------------------------------------
    # Sorting and searching
    # ------------------------------------------------------------------

    def _run_sort(self, algorithm: str, key: str, order: str, persist: bool) -> SortResult:
        algorithm = SortAlgorithm(algorithm)
        key = SortKey(key)
        order = SortOrder(order)
        strategy = SORT_STRATEGIES[algorithm]

        with self._lock:
            scratch = list(self._students)
            start = time.perf_counter()
            ordered = strategy(scratch, key, order)
            elapsed_ms = (time.perf_counter() - start) * 1000
            if persist:
                self._students = ordered
            students = [s.model_copy() for s in ordered]

        logger.info(
            f"Sorted {len(students)} students: {algorithm.value} by {key.value} {order.value} "
            f"({elapsed_ms:.3f}ms)",
            extra={"extra_fields": {
                "algorithm": algorithm.value,
                "key": key.value,
                "order": order.value,
                "count": len(students),
                "elapsed_ms": elapsed_ms,
                "persisted": persist,
            }}
        )
        return SortResult(
            algorithm=algorithm.value,
            key=key.value,
            order=order.value,
            students=students,
            elapsed_ms=elapsed_ms,
            complexity=COMPLEXITY_LABELS[algorithm.value],
        )

    def reorder_by(self, algorithm: str, key: str, order: str = "asc") -> SortResult:
        """
        Sort the roster and keep the result as the new canonical order.

        Args:
            algorithm: bubble, selection, insertion, merge or shell
            key: name, code or score
            order: asc or desc

        Returns:
            SortResult: Students in the new order, time spent in the sort step
                alone and the algorithm's complexity label

        Raises:
            ValueError: If algorithm, key or order is not recognised
        """
        return self._run_sort(algorithm, key, order, persist=True)

    sort = reorder_by

    def sorted_view(self, algorithm: str, key: str, order: str = "asc") -> SortResult:
        """Like reorder_by() but leaves the roster's order untouched."""
        return self._run_sort(algorithm, key, order, persist=False)

    def search(self, query: str, algorithm: str = "linear") -> SearchResult:
        """
        Find students matching a query.

        Linear (or sequential) returns every student whose name contains the
        query ignoring case, or whose code contains it. Binary sorts a scratch
        copy by name and returns at most one exact name match; the roster's
        own order is not changed.

        Raises:
            ValueError: If algorithm is not recognised
        """
        algorithm = SearchAlgorithm(algorithm)

        with self._lock:
            start = time.perf_counter()
            if algorithm == SearchAlgorithm.BINARY:
                scratch = merge_sort(self._students, SortKey.NAME, SortOrder.ASC, fold_case=True)
                index = binary_search(scratch, query)
                matches = [scratch[index]] if index != -1 else []
            else:
                matches = linear_search(self._students, query)
            elapsed_ms = (time.perf_counter() - start) * 1000
            students = [s.model_copy() for s in matches]

        logger.info(
            f"Search '{query}' ({algorithm.value}): {len(students)} match(es) in {elapsed_ms:.3f}ms",
            extra={"extra_fields": {
                "algorithm": algorithm.value,
                "matches": len(students),
                "elapsed_ms": elapsed_ms,
            }}
        )
        return SearchResult(
            algorithm=algorithm.value,
            query=query,
            students=students,
            elapsed_ms=elapsed_ms,
            complexity=COMPLEXITY_LABELS[algorithm.value],
        )

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def save_to_json(self) -> str:
        """Serialize the roster, in current order, as a JSON array."""
        with self._lock:
            data = [s.to_dict() for s in self._students]
        return json.dumps(data, indent=2, ensure_ascii=False)

    def load_from_json(self, text: Union[str, bytes]) -> int:
        """
        Replace the whole roster with the students in a JSON export.

        Registration codes are not re-validated. On any error the current
        roster is left as it was.

        Args:
            text: JSON array of student objects

        Returns:
            int: Number of students loaded

        Raises:
            FormatError: If the text is not JSON or not an array of students
        """
        try:
            data = json.loads(text)
        except (ValueError, RecursionError, TypeError) as e:
            raise FormatError(f"Could not parse roster file: {e}") from e

        if not isinstance(data, list):
            raise FormatError("Roster file must contain a JSON array")

        students = _parse_records(data)
        with self._lock:
            self._students = students

        logger.info(f"Roster loaded: {len(students)} students")
        return len(students)

    def summary(self) -> RosterSummary:
        """Count and average score of the current roster."""
        with self._lock:
            scores = [s.score for s in self._students]
        average = sum(scores) / len(scores) if scores else 0.0
        return RosterSummary(count=len(scores), average_score=average)
