"""In-memory record store.

Holds students, courses, enrollments and grades in insertion-ordered dicts
keyed by sequential integer ids (one counter per kind, starting at 1).

Not-found is signalled with None (lookups, updates) or False (deletes);
nothing here raises for a missing id. Natural-key uniqueness, enrollment
existence and score ranges are checked by the caller before writing.

Usage:
    from records.db.store import RecordStore

    store = RecordStore()
    student = store.create_student(StudentInput(...))
"""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from typing import TypeVar

import structlog

from records.db.models import (
    Course,
    CourseInput,
    CourseUpdate,
    Enrollment,
    EnrollmentInput,
    Grade,
    GradeInput,
    GradeUpdate,
    Student,
    StudentInput,
    StudentUpdate,
)

logger = structlog.get_logger(__name__)

RecordT = TypeVar("RecordT", Student, Course, Grade)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class RecordStore:
    """Process-local store for the four entity kinds.

    Construct one per application (or per test); it is passed to the web
    layer explicitly rather than living at module level.
    """

    def __init__(self) -> None:
        self._students: dict[int, Student] = {}
        self._courses: dict[int, Course] = {}
        self._enrollments: dict[int, Enrollment] = {}
        self._grades: dict[int, Grade] = {}

        self._next_student_id = 1
        self._next_course_id = 1
        self._next_enrollment_id = 1
        self._next_grade_id = 1

    def reset(self) -> None:
        """Drop every record and restart all id counters at 1."""
        self._students.clear()
        self._courses.clear()
        self._enrollments.clear()
        self._grades.clear()

        self._next_student_id = 1
        self._next_course_id = 1
        self._next_enrollment_id = 1
        self._next_grade_id = 1

        logger.info("store.reset")

    @staticmethod
    def _merge(record: RecordT, changes: dict) -> RecordT:
        return dataclasses.replace(record, **changes)

    # =========================================================================
    # STUDENTS
    # =========================================================================

    def list_students(self) -> list[Student]:
        return list(self._students.values())

    def get_student(self, student_id: int) -> Student | None:
        return self._students.get(student_id)

    def get_student_by_code(self, student_code: str) -> Student | None:
        """Find a student by natural key (e.g. "S1001")."""
        for student in self._students.values():
            if student.student_code == student_code:
                return student
        return None

    def get_student_by_email(self, email: str) -> Student | None:
        for student in self._students.values():
            if student.email == email:
                return student
        return None

    def create_student(self, data: StudentInput) -> Student:
        student = Student(
            id=self._next_student_id,
            student_code=data.student_code,
            name=data.name,
            email=data.email,
            year=data.year,
            avatar_url=data.avatar_url,
            created_at=_now(),
        )
        self._next_student_id += 1
        self._students[student.id] = student

        logger.debug("store.student_created", id=student.id, student_code=student.student_code)
        return student

    def update_student(self, student_id: int, update: StudentUpdate) -> Student | None:
        existing = self._students.get(student_id)
        if existing is None:
            return None

        changes = update.changes()
        updated = self._merge(existing, changes)
        self._students[student_id] = updated

        logger.debug("store.student_updated", id=student_id, fields=sorted(changes))
        return updated

    def delete_student(self, student_id: int) -> bool:
        """Delete a student with its enrollments and grades.

        Dependent rows are removed before the student itself, so no orphan
        enrollment or grade survives the call.
        """
        enrollments = self.get_enrollments_by_student(student_id)
        for enrollment in enrollments:
            self.delete_enrollment(enrollment.id)

        grades = self.get_grades_by_student(student_id)
        for grade in grades:
            self.delete_grade(grade.id)

        removed = self._students.pop(student_id, None) is not None
        logger.info(
            "store.student_deleted",
            id=student_id,
            found=removed,
            enrollments_removed=len(enrollments),
            grades_removed=len(grades),
        )
        return removed

    # =========================================================================
    # COURSES
    # =========================================================================

    def list_courses(self) -> list[Course]:
        return list(self._courses.values())

    def get_course(self, course_id: int) -> Course | None:
        return self._courses.get(course_id)

    def get_course_by_code(self, course_code: str) -> Course | None:
        """Find a course by natural key (e.g. "MATH101")."""
        for course in self._courses.values():
            if course.course_code == course_code:
                return course
        return None

    def create_course(self, data: CourseInput) -> Course:
        course = Course(
            id=self._next_course_id,
            course_code=data.course_code,
            name=data.name,
            description=data.description,
            credits=data.credits,
            created_at=_now(),
        )
        self._next_course_id += 1
        self._courses[course.id] = course

        logger.debug("store.course_created", id=course.id, course_code=course.course_code)
        return course

    def update_course(self, course_id: int, update: CourseUpdate) -> Course | None:
        existing = self._courses.get(course_id)
        if existing is None:
            return None

        changes = update.changes()
        updated = self._merge(existing, changes)
        self._courses[course_id] = updated

        logger.debug("store.course_updated", id=course_id, fields=sorted(changes))
        return updated

    def delete_course(self, course_id: int) -> bool:
        """Delete a course with its enrollments and grades."""
        enrollments = self.get_enrollments_by_course(course_id)
        for enrollment in enrollments:
            self.delete_enrollment(enrollment.id)

        grades = self.get_grades_by_course(course_id)
        for grade in grades:
            self.delete_grade(grade.id)

        removed = self._courses.pop(course_id, None) is not None
        logger.info(
            "store.course_deleted",
            id=course_id,
            found=removed,
            enrollments_removed=len(enrollments),
            grades_removed=len(grades),
        )
        return removed

    # =========================================================================
    # ENROLLMENTS
    # =========================================================================

    def list_enrollments(self) -> list[Enrollment]:
        return list(self._enrollments.values())

    def get_enrollment(self, enrollment_id: int) -> Enrollment | None:
        return self._enrollments.get(enrollment_id)

    def get_enrollments_by_student(self, student_id: int) -> list[Enrollment]:
        return [e for e in self._enrollments.values() if e.student_id == student_id]

    def get_enrollments_by_course(self, course_id: int) -> list[Enrollment]:
        return [e for e in self._enrollments.values() if e.course_id == course_id]

    def has_enrollment(self, student_id: int, course_id: int) -> bool:
        """Check whether the student is enrolled in the course."""
        return any(e.course_id == course_id for e in self.get_enrollments_by_student(student_id))

    def create_enrollment(self, data: EnrollmentInput) -> Enrollment:
        enrollment = Enrollment(
            id=self._next_enrollment_id,
            student_id=data.student_id,
            course_id=data.course_id,
            enrollment_date=_now(),
        )
        self._next_enrollment_id += 1
        self._enrollments[enrollment.id] = enrollment

        logger.debug(
            "store.enrollment_created",
            id=enrollment.id,
            student_id=enrollment.student_id,
            course_id=enrollment.course_id,
        )
        return enrollment

    def delete_enrollment(self, enrollment_id: int) -> bool:
        removed = self._enrollments.pop(enrollment_id, None) is not None
        logger.debug("store.enrollment_deleted", id=enrollment_id, found=removed)
        return removed

    # =========================================================================
    # GRADES
    # =========================================================================

    def list_grades(self) -> list[Grade]:
        return list(self._grades.values())

    def get_grade(self, grade_id: int) -> Grade | None:
        return self._grades.get(grade_id)

    def get_grades_by_student(self, student_id: int) -> list[Grade]:
        return [g for g in self._grades.values() if g.student_id == student_id]

    def get_grades_by_course(self, course_id: int) -> list[Grade]:
        return [g for g in self._grades.values() if g.course_id == course_id]

    def list_terms(self) -> list[str]:
        """Distinct grade terms in first-seen order."""
        return list(dict.fromkeys(g.term for g in self._grades.values()))

    def create_grade(self, data: GradeInput) -> Grade:
        grade = Grade(
            id=self._next_grade_id,
            student_id=data.student_id,
            course_id=data.course_id,
            score=data.score,
            term=data.term,
            graded_date=_now(),
        )
        self._next_grade_id += 1
        self._grades[grade.id] = grade

        logger.debug(
            "store.grade_created",
            id=grade.id,
            student_id=grade.student_id,
            course_id=grade.course_id,
            score=grade.score,
        )
        return grade

    def update_grade(self, grade_id: int, update: GradeUpdate) -> Grade | None:
        existing = self._grades.get(grade_id)
        if existing is None:
            return None

        changes = update.changes()
        updated = self._merge(existing, changes)
        self._grades[grade_id] = updated

        logger.debug("store.grade_updated", id=grade_id, fields=sorted(changes))
        return updated

    def delete_grade(self, grade_id: int) -> bool:
        removed = self._grades.pop(grade_id, None) is not None
        logger.debug("store.grade_deleted", id=grade_id, found=removed)
        return removed
