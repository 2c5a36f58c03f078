"""Read views joining entities through enrollments.

Every function recomputes from the store's current contents; nothing is
cached. Joins are linear scans over enrollments and grades, so the bulk
variants cost O(n * m).

Views:
- StudentWithCourses: student + enrolled courses + average grade
- CourseWithStudents: course + enrolled students + average grade
- FullGrade: grade + embedded student and course references
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

import structlog

from records.core.scoring import average_score
from records.core.errors import IntegrityFaultError
from records.db.models import Course, Grade, Student
from records.db.store import RecordStore

logger = structlog.get_logger(__name__)


# =============================================================================
# VIEW TYPES
# =============================================================================


@dataclass
class CourseRef:
    """Minimal course projection embedded in other views."""

    id: int
    course_code: str
    name: str

    @classmethod
    def from_course(cls, course: Course) -> CourseRef:
        return cls(id=course.id, course_code=course.course_code, name=course.name)


@dataclass
class StudentRef:
    """Minimal student projection embedded in other views."""

    id: int
    student_code: str
    name: str

    @classmethod
    def from_student(cls, student: Student) -> StudentRef:
        return cls(id=student.id, student_code=student.student_code, name=student.name)


@dataclass
class StudentWithCourses:
    id: int
    student_code: str
    name: str
    email: str
    year: int
    avatar_url: str | None
    created_at: datetime
    courses: list[CourseRef] = field(default_factory=list)
    average_grade: float = 0.0


@dataclass
class CourseWithStudents:
    id: int
    course_code: str
    name: str
    description: str | None
    credits: int
    created_at: datetime
    students: list[StudentRef] = field(default_factory=list)
    average_grade: float = 0.0


@dataclass
class FullGrade:
    id: int
    student_id: int
    course_id: int
    score: float
    term: str
    graded_date: datetime
    student: StudentRef
    course: CourseRef


# =============================================================================
# ENRICHMENT
# =============================================================================


def student_with_courses(store: RecordStore, student_id: int) -> StudentWithCourses | None:
    """Build the student view with enrolled courses and average grade.

    Enrollments pointing at a course that no longer exists are skipped.

    Returns:
        The view, or None if the student does not exist.
    """
    student = store.get_student(student_id)
    if student is None:
        return None

    courses: list[CourseRef] = []
    for enrollment in store.get_enrollments_by_student(student_id):
        course = store.get_course(enrollment.course_id)
        if course is None:
            logger.warning(
                "dangling_enrollment_skipped",
                enrollment_id=enrollment.id,
                course_id=enrollment.course_id,
            )
            continue
        courses.append(CourseRef.from_course(course))

    scores = [g.score for g in store.get_grades_by_student(student_id)]

    return StudentWithCourses(
        id=student.id,
        student_code=student.student_code,
        name=student.name,
        email=student.email,
        year=student.year,
        avatar_url=student.avatar_url,
        created_at=student.created_at,
        courses=courses,
        average_grade=average_score(scores),
    )


def course_with_students(store: RecordStore, course_id: int) -> CourseWithStudents | None:
    """Build the course view with enrolled students and average grade.

    Returns:
        The view, or None if the course does not exist.
    """
    course = store.get_course(course_id)
    if course is None:
        return None

    students: list[StudentRef] = []
    for enrollment in store.get_enrollments_by_course(course_id):
        student = store.get_student(enrollment.student_id)
        if student is None:
            logger.warning(
                "dangling_enrollment_skipped",
                enrollment_id=enrollment.id,
                student_id=enrollment.student_id,
            )
            continue
        students.append(StudentRef.from_student(student))

    scores = [g.score for g in store.get_grades_by_course(course_id)]

    return CourseWithStudents(
        id=course.id,
        course_code=course.course_code,
        name=course.name,
        description=course.description,
        credits=course.credits,
        created_at=course.created_at,
        students=students,
        average_grade=average_score(scores),
    )


def all_students_with_courses(store: RecordStore) -> list[StudentWithCourses]:
    views = (student_with_courses(store, s.id) for s in store.list_students())
    return [v for v in views if v is not None]


def all_courses_with_students(store: RecordStore) -> list[CourseWithStudents]:
    views = (course_with_students(store, c.id) for c in store.list_courses())
    return [v for v in views if v is not None]


def _enrich_grade(store: RecordStore, grade: Grade) -> FullGrade:
    student = store.get_student(grade.student_id)
    if student is None:
        raise IntegrityFaultError(grade.id, "student", grade.student_id)

    course = store.get_course(grade.course_id)
    if course is None:
        raise IntegrityFaultError(grade.id, "course", grade.course_id)

    return FullGrade(
        id=grade.id,
        student_id=grade.student_id,
        course_id=grade.course_id,
        score=grade.score,
        term=grade.term,
        graded_date=grade.graded_date,
        student=StudentRef.from_student(student),
        course=CourseRef.from_course(course),
    )


def full_grade(store: RecordStore, grade_id: int) -> FullGrade | None:
    """Build the grade view with its student and course.

    Returns:
        The view, or None if the grade does not exist.

    Raises:
        IntegrityFaultError: If the grade's student or course is missing.
    """
    grade = store.get_grade(grade_id)
    if grade is None:
        return None
    return _enrich_grade(store, grade)


def all_full_grades(store: RecordStore) -> list[FullGrade]:
    """Enrich every grade. One broken grade fails the whole list.

    Raises:
        IntegrityFaultError: If any grade's student or course is missing.
    """
    return [_enrich_grade(store, grade) for grade in store.list_grades()]
