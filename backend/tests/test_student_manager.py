"""
Unit tests for StudentManager.
Tests CRUD, sorting, searching and JSON import/export.
"""

import json
import pytest

from roster.core import StudentManager, ValidationError, NotFoundError, FormatError
from roster.core.algorithms import SortAlgorithm
from roster.models import Student, StudentCreate, StudentUpdate


def ids(students):
    return [s.id for s in students]


class TestCrud:
    """Tests for add/get/update/delete."""

    def test_initial_order(self, manager):
        assert ids(manager.get_students()) == ["s1", "s2", "s3", "s4", "s5"]

    def test_get_students_returns_copies(self, manager):
        students = manager.get_students()
        students[0].name = "Changed"
        students.pop()
        assert manager.get_students()[0].name == "Budi Santoso"
        assert len(manager) == 5

    def test_get_student(self, manager):
        assert manager.get_student("s2").name == "Alice Smith"

    def test_get_student_not_found(self, manager):
        with pytest.raises(NotFoundError):
            manager.get_student("missing")

    def test_add_valid_code_appends_one(self, manager):
        created = manager.add_student(
            {"id": "s6", "name": "Eka", "code": "12345", "category": "Law", "score": 3.0}
        )
        students = manager.get_students()
        assert len(students) == 6
        assert students[-1].id == "s6"
        assert created.code == "12345"
        assert [s.code for s in students].count("12345") == 1

    def test_add_invalid_code_rejected(self, manager):
        with pytest.raises(ValidationError) as exc_info:
            manager.add_student({"id": "s6", "name": "Eka", "code": "12a34", "category": "Law", "score": 3.0})
        assert exc_info.value.field == "code"
        assert len(manager) == 5

    @pytest.mark.parametrize("code", ["", " 123", "123\n", "１２３", "-1"])
    def test_add_rejects_non_digit_codes(self, code):
        manager = StudentManager()
        with pytest.raises(ValidationError):
            manager.add_student({"id": "x", "name": "X", "code": code, "category": "C", "score": 1.0})

    def test_add_generates_missing_id(self):
        manager = StudentManager()
        created = manager.add_student(StudentCreate(name="Eka", code="1", category="Law", score=2.0))
        assert len(created.id) == 9
        assert manager.get_students()[0].id == created.id

    def test_add_missing_field_is_validation_error(self):
        manager = StudentManager()
        with pytest.raises(ValidationError):
            manager.add_student({"id": "x", "code": "1"})

    def test_add_does_not_deduplicate(self, manager):
        bag = {"id": "s1", "name": "Copy", "code": "2101001", "category": "C", "score": 1.0}
        manager.add_student(bag)
        assert ids(manager.get_students()).count("s1") == 2

    def test_update_fields(self, manager):
        updated = manager.update_student("s1", {"name": "Budi S.", "score": 3.6})
        assert updated.name == "Budi S."
        assert updated.score == 3.6
        assert updated.category == "Informatics"
        assert manager.get_student("s1").name == "Budi S."

    def test_update_applies_zero_and_empty(self, manager):
        manager.update_student("s1", {"score": 0, "category": ""})
        student = manager.get_student("s1")
        assert student.score == 0
        assert student.category == ""

    def test_update_skips_none(self, manager):
        manager.update_student("s1", StudentUpdate(name=None, score=2.0))
        student = manager.get_student("s1")
        assert student.name == "Budi Santoso"
        assert student.score == 2.0

    def test_update_ignores_id(self, manager):
        manager.update_student("s1", {"id": "zzz"})
        assert manager.get_student("s1").id == "s1"

    def test_update_does_not_validate_code(self, manager):
        manager.update_student("s1", {"code": "abc"})
        assert manager.get_student("s1").code == "abc"

    def test_update_not_found(self, manager):
        with pytest.raises(NotFoundError) as exc_info:
            manager.update_student("missing", {"name": "X"})
        assert exc_info.value.student_id == "missing"

    def test_delete(self, manager):
        assert manager.delete_student("s3") == 1
        assert ids(manager.get_students()) == ["s1", "s2", "s4", "s5"]

    def test_delete_unknown_is_noop(self, manager):
        before = [s.to_dict() for s in manager.get_students()]
        assert manager.delete_student("missing") == 0
        assert [s.to_dict() for s in manager.get_students()] == before

    def test_delete_removes_all_duplicates(self):
        bag = {"id": "d", "name": "D", "code": "1", "category": "C", "score": 1.0}
        manager = StudentManager([bag, dict(bag)])
        assert manager.delete_student("d") == 2
        assert len(manager) == 0


class TestSort:
    """Tests for reorder_by / sort / sorted_view."""

    def test_merge_score_desc(self):
        manager = StudentManager([
            {"id": "a", "name": "A", "code": "1", "category": "C", "score": 1.0},
            {"id": "b", "name": "B", "code": "2", "category": "C", "score": 4.0},
            {"id": "c", "name": "C", "code": "3", "category": "C", "score": 2.5},
        ])
        result = manager.sort("merge", "score", "desc")
        assert [s.score for s in result.students] == [4.0, 2.5, 1.0]
        assert result.elapsed_ms >= 0
        assert result.complexity == "O(n log n) - Logarithmic"

    @pytest.mark.parametrize("algorithm", [a.value for a in SortAlgorithm])
    def test_reorder_persists(self, manager, algorithm):
        result = manager.reorder_by(algorithm, "name")
        assert ids(manager.get_students()) == ids(result.students)
        assert [s.name for s in result.students] == sorted(s.name for s in result.students)

    def test_sort_is_reorder_by(self, manager):
        result = manager.sort("shell", "code", "desc")
        assert ids(manager.get_students()) == ids(result.students)
        assert ids(result.students) == ["s5", "s4", "s3", "s2", "s1"]

    def test_sorted_view_does_not_persist(self, manager):
        result = manager.sorted_view("insertion", "score", "desc")
        assert ids(result.students) == ["s2", "s4", "s1", "s5", "s3"]
        assert ids(manager.get_students()) == ["s1", "s2", "s3", "s4", "s5"]

    def test_resort_is_identity(self, manager):
        first = manager.reorder_by("bubble", "score", "asc")
        second = manager.reorder_by("bubble", "score", "asc")
        assert ids(first.students) == ids(second.students)

    def test_stable_sort_keeps_ties(self, manager):
        result = manager.reorder_by("insertion", "score", "asc")
        assert ids(result.students) == ["s3", "s1", "s5", "s2", "s4"]

    def test_unknown_algorithm(self, manager):
        with pytest.raises(ValueError):
            manager.reorder_by("quick", "name")

    def test_unknown_key(self, manager):
        with pytest.raises(ValueError):
            manager.reorder_by("merge", "category")

    def test_sort_empty(self):
        result = StudentManager().reorder_by("merge", "name")
        assert result.students == []


class TestSearch:
    """Tests for search()."""

    def test_linear_substring_case_insensitive(self, manager):
        result = manager.search("smith", "linear")
        assert [s.name for s in result.students] == ["Alice Smith", "SMITHERS"]
        assert result.complexity == "O(n) - Linear"
        assert result.elapsed_ms >= 0

    def test_sequential_same_as_linear(self, manager):
        assert ids(manager.search("smith", "sequential").students) == ["s2", "s3"]

    def test_linear_by_code(self, manager):
        assert ids(manager.search("1004", "linear").students) == ["s4"]

    def test_linear_no_match_is_empty(self, manager):
        assert manager.search("nobody", "linear").students == []

    def test_binary_exact_name(self):
        manager = StudentManager([
            {"id": "b", "name": "Bob", "code": "1", "category": "C", "score": 1.0},
            {"id": "a", "name": "Alice", "code": "2", "category": "C", "score": 1.0},
            {"id": "c", "name": "Carol", "code": "3", "category": "C", "score": 1.0},
        ])
        result = manager.search("Alice", "binary")
        assert [s.name for s in result.students] == ["Alice"]
        assert result.complexity == "O(log n) - Logarithmic"

    def test_binary_ignores_case(self, manager):
        assert ids(manager.search("citra dewi", "binary").students) == ["s4"]

    def test_binary_handles_mixed_case_names(self):
        manager = StudentManager([
            {"id": "1", "name": "alice", "code": "1", "category": "C", "score": 1.0},
            {"id": "2", "name": "Bob", "code": "2", "category": "C", "score": 1.0},
        ])
        assert ids(manager.search("alice", "binary").students) == ["1"]

    def test_binary_does_not_reorder(self, manager):
        manager.search("Alice Smith", "binary")
        assert ids(manager.get_students()) == ["s1", "s2", "s3", "s4", "s5"]

    def test_binary_partial_name_no_match(self, manager):
        assert manager.search("Alice", "binary").students == []

    def test_unknown_algorithm(self, manager):
        with pytest.raises(ValueError):
            manager.search("x", "jump")


class TestJson:
    """Tests for save_to_json / load_from_json."""

    def test_round_trip(self, manager):
        manager.reorder_by("merge", "score", "desc")
        before = [s.to_dict() for s in manager.get_students()]

        other = StudentManager()
        assert other.load_from_json(manager.save_to_json()) == 5
        assert [s.to_dict() for s in other.get_students()] == before

    def test_save_shape(self, manager):
        data = json.loads(manager.save_to_json())
        assert isinstance(data, list)
        assert data[0] == {
            "id": "s1", "name": "Budi Santoso", "code": "2101001",
            "category": "Informatics", "score": 3.2,
        }

    def test_load_replaces(self, manager):
        manager.load_from_json('[{"id": "n", "name": "New", "code": "9", "category": "C", "score": 1}]')
        assert ids(manager.get_students()) == ["n"]

    def test_load_skips_code_validation(self, manager):
        manager.load_from_json('[{"id": "n", "name": "New", "code": "x9", "category": "C", "score": 1}]')
        assert manager.get_student("n").code == "x9"

    def test_load_legacy_export(self):
        manager = StudentManager()
        manager.load_from_json('[{"id": "n", "name": "Budi", "nim": "21", "major": "Law", "gpa": 3.4}]')
        assert manager.get_student("n").to_dict() == {
            "id": "n", "name": "Budi", "code": "21", "category": "Law", "score": 3.4,
        }

    def test_load_bytes(self):
        manager = StudentManager()
        assert manager.load_from_json(b"[]") == 0

    @pytest.mark.parametrize("text", [
        "not json",
        '{"id": "n"}',
        "[1, 2]",
        '[{"id": "n", "name": "New"}]',
        '[{"id": "n", "name": "New", "code": 9, "category": "C", "score": 1}]',
        '[{"id": "n", "name": "New", "code": "9", "category": "C", "score": NaN}]',
        '[{"id": "n", "name": "New", "code": "9", "category": "C", "score": Infinity}]',
    ])
    def test_load_bad_input(self, manager, text):
        with pytest.raises(FormatError):
            manager.load_from_json(text)
        assert len(manager) == 5

    @pytest.mark.parametrize("text", [
        "[" + "1" * 5000 + "]",
        "[" * 100000 + "]" * 100000,
    ], ids=["oversized-integer", "deep-nesting"])
    def test_load_parser_limits(self, manager, text):
        with pytest.raises(FormatError):
            manager.load_from_json(text)
        assert len(manager) == 5

    def test_format_error_is_chained(self, manager):
        with pytest.raises(FormatError) as exc_info:
            manager.load_from_json("{")
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)


class TestSummary:
    """Tests for summary()."""

    def test_summary(self, manager):
        summary = manager.summary()
        assert summary.count == 5
        assert summary.average_score == pytest.approx(3.38)

    def test_summary_empty(self):
        summary = StudentManager().summary()
        assert summary.count == 0
        assert summary.average_score == 0.0


class TestConstruction:
    """Tests for the constructor."""

    def test_accepts_student_objects(self):
        student = Student(id="a", name="A", code="1", category="C", score=1.0)
        manager = StudentManager([student])
        assert manager.get_student("a").name == "A"

    def test_rejects_bad_bags(self):
        with pytest.raises(FormatError):
            StudentManager([{"id": "a"}])
