"""Tests for RecordStore CRUD, partial updates and cascade deletion."""

from datetime import datetime

import pytest

from records.db.models import (
    UNSET,
    CourseUpdate,
    EnrollmentInput,
    GradeInput,
    GradeUpdate,
    StudentUpdate,
)
from records.db.store import RecordStore


class TestCreateAndGet:
    """Tests for create_* followed by get_*."""

    def test_create_student_assigns_id_and_timestamp(self, store, student_input):
        """Created student equals input plus id and created_at."""
        data = student_input(code="S1001", name="Emily", email="emily@example.com", year=3)
        student = store.create_student(data)

        fetched = store.get_student(student.id)
        assert fetched == student
        assert fetched.id == 1
        assert fetched.student_code == "S1001"
        assert fetched.name == "Emily"
        assert fetched.email == "emily@example.com"
        assert fetched.year == 3
        assert fetched.avatar_url is None
        assert isinstance(fetched.created_at, datetime)
        assert fetched.created_at.tzinfo is not None

    def test_ids_are_sequential_per_kind(self, store, student_input, course_input):
        """Each kind has its own counter starting at 1."""
        s1 = store.create_student(student_input(code="S1"))
        s2 = store.create_student(student_input(code="S2"))
        c1 = store.create_course(course_input(code="C1"))

        assert (s1.id, s2.id) == (1, 2)
        assert c1.id == 1

    def test_create_course(self, store, course_input):
        """Created course keeps optional description."""
        course = store.create_course(course_input(description="Algebra"))
        fetched = store.get_course(course.id)
        assert fetched.course_code == "MATH101"
        assert fetched.description == "Algebra"
        assert fetched.credits == 3
        assert isinstance(fetched.created_at, datetime)

    def test_create_enrollment_and_grade(self, store):
        """Enrollment and grade get ids and dates stamped."""
        enrollment = store.create_enrollment(EnrollmentInput(student_id=1, course_id=2))
        grade = store.create_grade(GradeInput(student_id=1, course_id=2, score=88.5, term="Fall 2023"))

        assert store.get_enrollment(enrollment.id) == enrollment
        assert isinstance(enrollment.enrollment_date, datetime)
        assert store.get_grade(grade.id).score == 88.5
        assert isinstance(grade.graded_date, datetime)

    def test_get_missing_returns_none(self, store):
        """Lookups never raise for unknown ids."""
        assert store.get_student(99) is None
        assert store.get_course(99) is None
        assert store.get_enrollment(99) is None
        assert store.get_grade(99) is None

    def test_list_preserves_insertion_order(self, store, student_input):
        """list_students returns records in creation order."""
        for code in ("S3", "S1", "S2"):
            store.create_student(student_input(code=code))
        assert [s.student_code for s in store.list_students()] == ["S3", "S1", "S2"]


class TestNaturalKeyLookup:
    """Tests for lookups by student code, email and course code."""

    def test_get_student_by_code(self, store, student_input):
        store.create_student(student_input(code="S1001"))
        assert store.get_student_by_code("S1001").student_code == "S1001"
        assert store.get_student_by_code("S9999") is None

    def test_get_student_by_email(self, store, student_input):
        store.create_student(student_input(email="ana@example.com"))
        assert store.get_student_by_email("ana@example.com") is not None
        assert store.get_student_by_email("nobody@example.com") is None

    def test_get_course_by_code(self, store, course_input):
        store.create_course(course_input(code="ENG201"))
        assert store.get_course_by_code("ENG201").course_code == "ENG201"
        assert store.get_course_by_code("MATH101") is None

    def test_store_does_not_enforce_uniqueness(self, store, student_input):
        """Duplicate email is accepted; uniqueness is the route layer's job."""
        first = store.create_student(student_input(code="S1", email="same@example.com"))
        second = store.create_student(student_input(code="S2", email="same@example.com"))

        assert first.id != second.id
        assert len(store.list_students()) == 2


class TestPartialUpdate:
    """Tests for update_* shallow merge semantics."""

    def test_update_preserves_omitted_fields(self, store, student_input):
        """Only provided fields change."""
        student = store.create_student(student_input(code="S1", name="Ana", year=1))
        updated = store.update_student(student.id, StudentUpdate(year=2))

        assert updated.year == 2
        assert updated.name == "Ana"
        assert updated.student_code == "S1"
        assert updated.created_at == student.created_at
        assert store.get_student(student.id) == updated

    def test_explicit_none_clears_field(self, store, student_input):
        """None overwrites, UNSET preserves."""
        student = store.create_student(student_input(avatar_url="https://img/1"))

        kept = store.update_student(student.id, StudentUpdate(name="Other"))
        assert kept.avatar_url == "https://img/1"

        cleared = store.update_student(student.id, StudentUpdate(avatar_url=None))
        assert cleared.avatar_url is None

    def test_update_course_description(self, store, course_input):
        course = store.create_course(course_input(description="Old"))
        updated = store.update_course(course.id, CourseUpdate(description="New", credits=4))
        assert updated.description == "New"
        assert updated.credits == 4
        assert updated.name == course.name

    def test_update_grade_score_and_term(self, store):
        grade = store.create_grade(GradeInput(student_id=1, course_id=1, score=70.0, term="A"))
        updated = store.update_grade(grade.id, GradeUpdate(score=91.0))
        assert updated.score == 91.0
        assert updated.term == "A"
        assert updated.graded_date == grade.graded_date

    def test_update_missing_returns_none(self, store):
        assert store.update_student(42, StudentUpdate(name="X")) is None
        assert store.update_course(42, CourseUpdate(name="X")) is None
        assert store.update_grade(42, GradeUpdate(score=1.0)) is None

    def test_update_changes_lists_only_set_fields(self):
        update = StudentUpdate(name="Ana", avatar_url=None)
        assert update.changes() == {"name": "Ana", "avatar_url": None}
        assert StudentUpdate().is_empty()
        assert StudentUpdate().year is UNSET


class TestDelete:
    """Tests for delete_* and cascade deletion."""

    def test_delete_then_get_is_none(self, store, student_input, course_input):
        student = store.create_student(student_input())
        course = store.create_course(course_input())

        assert store.delete_student(student.id) is True
        assert store.delete_course(course.id) is True
        assert store.get_student(student.id) is None
        assert store.get_course(course.id) is None

    def test_delete_missing_returns_false(self, store):
        assert store.delete_student(1) is False
        assert store.delete_course(1) is False
        assert store.delete_enrollment(1) is False
        assert store.delete_grade(1) is False

    def test_delete_student_cascades(self, store, student_input, course_input, enroll_and_grade):
        """Enrollments and grades of the student are removed, others stay."""
        ana = store.create_student(student_input(code="S1"))
        luis = store.create_student(student_input(code="S2"))
        math = store.create_course(course_input(code="MATH101"))
        eng = store.create_course(course_input(code="ENG201"))

        enroll_and_grade(store, ana.id, math.id, 90.0)
        enroll_and_grade(store, ana.id, eng.id, 80.0)
        enroll_and_grade(store, luis.id, math.id, 70.0)

        assert store.delete_student(ana.id) is True

        assert store.get_enrollments_by_student(ana.id) == []
        assert store.get_grades_by_student(ana.id) == []
        assert len(store.get_enrollments_by_student(luis.id)) == 1
        assert len(store.get_grades_by_student(luis.id)) == 1

    def test_delete_course_with_two_enrollments_and_grades(
        self, store, student_input, course_input, enroll_and_grade
    ):
        """Course delete removes its 2 enrollments and 2 grades."""
        s1 = store.create_student(student_input(code="S1"))
        s2 = store.create_student(student_input(code="S2"))
        course = store.create_course(course_input(code="SCI301"))
        other = store.create_course(course_input(code="HIS202"))

        enroll_and_grade(store, s1.id, course.id, 95.0)
        enroll_and_grade(store, s2.id, course.id, 65.0)
        enroll_and_grade(store, s1.id, other.id, 85.0)

        assert store.delete_course(course.id) is True

        assert store.get_course(course.id) is None
        assert all(e.course_id != course.id for e in store.list_enrollments())
        assert all(g.course_id != course.id for g in store.list_grades())
        assert len(store.list_enrollments()) == 1
        assert len(store.list_grades()) == 1

    def test_cascade_runs_even_without_entity(self, store):
        """Orphan rows for an unknown student are still cleaned up."""
        store.create_enrollment(EnrollmentInput(student_id=7, course_id=1))
        store.create_grade(GradeInput(student_id=7, course_id=1, score=50.0, term="T"))

        assert store.delete_student(7) is False
        assert store.list_enrollments() == []
        assert store.list_grades() == []


class TestHelpers:
    """Tests for has_enrollment, list_terms and reset."""

    def test_has_enrollment(self, store):
        store.create_enrollment(EnrollmentInput(student_id=1, course_id=2))
        assert store.has_enrollment(1, 2) is True
        assert store.has_enrollment(2, 1) is False

    def test_list_terms_first_seen_order(self, store):
        for term in ("Spring 2023", "Fall 2023", "Spring 2023"):
            store.create_grade(GradeInput(student_id=1, course_id=1, score=80.0, term=term))
        assert store.list_terms() == ["Spring 2023", "Fall 2023"]

    def test_reset_restarts_counters(self, store, student_input):
        store.create_student(student_input(code="S1"))
        store.create_student(student_input(code="S2"))

        store.reset()

        assert store.list_students() == []
        assert store.create_student(student_input(code="S3")).id == 1

    @pytest.mark.parametrize("count", [0, 1, 5])
    def test_separate_instances_are_isolated(self, student_input, count):
        a = RecordStore()
        b = RecordStore()
        for i in range(count):
            a.create_student(student_input(code=f"S{i}"))
        assert len(a.list_students()) == count
        assert b.list_students() == []
