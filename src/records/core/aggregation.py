"""Dashboard statistics and performance reports.

Everything is computed from the store on each call.

Ordering rules:
- Top students and performance rows: average descending, then id ascending.
- Score comparison rows: course name ascending.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import structlog

from records.core.enrichment import all_students_with_courses
from records.core.scoring import (
    GradeDistribution,
    average_score,
    grade_distribution,
    letter_grade,
)
from records.db.models import Grade
from records.db.store import RecordStore

logger = structlog.get_logger(__name__)

DEFAULT_TOP_STUDENTS = 3


# =============================================================================
# DASHBOARD
# =============================================================================


@dataclass
class TopStudent:
    id: int
    name: str
    average_grade: float


@dataclass
class ActivityItem:
    type: str
    message: str
    timestamp: str


@dataclass
class DashboardStats:
    total_students: int
    active_courses: int
    average_grade: float
    pending_grades: int
    grade_distribution: GradeDistribution
    top_students: list[TopStudent] = field(default_factory=list)
    recent_activity: list[ActivityItem] = field(default_factory=list)


# Illustrative feed shown on the dashboard; not derived from store mutations.
# (type, message, age)
_SAMPLE_ACTIVITY = (
    ("add_student", "New student added: Sarah Johnson", timedelta(minutes=30)),
    ("update_grade", "Grade updated: Math 101 for James Wilson", timedelta(days=1)),
    ("complete_course", "Course completed: History 202 by Emma Davis", timedelta(hours=25)),
    ("attendance_alert", "Low attendance alert: Michael Brown in Physics 301", timedelta(days=15)),
)


def sample_activity(now: datetime | None = None) -> list[ActivityItem]:
    """Build the placeholder activity feed with timestamps relative to now."""
    now = now or datetime.now(timezone.utc)
    return [
        ActivityItem(type=kind, message=message, timestamp=(now - age).isoformat())
        for kind, message, age in _SAMPLE_ACTIVITY
    ]


def count_pending_grades(store: RecordStore) -> int:
    """Count enrollments that have no grade for the same student and course."""
    graded = {(g.student_id, g.course_id) for g in store.list_grades()}
    return sum(
        1 for e in store.list_enrollments() if (e.student_id, e.course_id) not in graded
    )


def top_students(store: RecordStore, limit: int = DEFAULT_TOP_STUDENTS) -> list[TopStudent]:
    """Best students by average grade; ties go to the lower id."""
    ranked = sorted(
        all_students_with_courses(store),
        key=lambda s: (-s.average_grade, s.id),
    )
    return [
        TopStudent(id=s.id, name=s.name, average_grade=s.average_grade)
        for s in ranked[:limit]
    ]


def dashboard_stats(
    store: RecordStore,
    top_limit: int = DEFAULT_TOP_STUDENTS,
    now: datetime | None = None,
) -> DashboardStats:
    """Compute the dashboard summary.

    Args:
        store: Record store to read from
        top_limit: How many top students to include
        now: Reference time for the activity feed (defaults to current UTC time)

    Returns:
        DashboardStats with counts, overall average, band histogram,
        top students and the activity feed.
    """
    scores = [g.score for g in store.list_grades()]

    stats = DashboardStats(
        total_students=len(store.list_students()),
        active_courses=len(store.list_courses()),
        average_grade=average_score(scores),
        pending_grades=count_pending_grades(store),
        grade_distribution=grade_distribution(scores),
        top_students=top_students(store, top_limit),
        recent_activity=sample_activity(now),
    )

    logger.debug(
        "dashboard_stats_computed",
        total_students=stats.total_students,
        active_courses=stats.active_courses,
        grades=len(scores),
    )
    return stats


# =============================================================================
# REPORTS
# =============================================================================


@dataclass
class StudentPerformance:
    id: int
    student_code: str
    name: str
    year: int
    course_count: int
    average_score: float
    letter: str


@dataclass
class CoursePerformance:
    id: int
    course_code: str
    name: str
    credits: int
    student_count: int
    average_score: float
    letter: str
    grade_distribution: dict[str, int] = field(default_factory=dict)


@dataclass
class ScoreComparison:
    course_id: int
    name: str
    average_score: float


def _grades_for(
    store: RecordStore,
    term: str | None = None,
    course_id: int | None = None,
) -> list[Grade]:
    grades = store.list_grades()
    if term is not None:
        grades = [g for g in grades if g.term == term]
    if course_id is not None:
        grades = [g for g in grades if g.course_id == course_id]
    return grades


def student_performance(store: RecordStore, term: str | None = None) -> list[StudentPerformance]:
    """Per-student averages, optionally restricted to one term.

    Students without grades appear with an average of 0.
    """
    grades = _grades_for(store, term=term)

    rows = []
    for student in store.list_students():
        avg = average_score(g.score for g in grades if g.student_id == student.id)
        rows.append(
            StudentPerformance(
                id=student.id,
                student_code=student.student_code,
                name=student.name,
                year=student.year,
                course_count=len(store.get_enrollments_by_student(student.id)),
                average_score=avg,
                letter=letter_grade(avg),
            )
        )

    rows.sort(key=lambda r: (-r.average_score, r.id))
    return rows


def course_performance(store: RecordStore, term: str | None = None) -> list[CoursePerformance]:
    """Per-course averages and band counts, optionally restricted to one term."""
    grades = _grades_for(store, term=term)

    rows = []
    for course in store.list_courses():
        scores = [g.score for g in grades if g.course_id == course.id]
        avg = average_score(scores)
        rows.append(
            CoursePerformance(
                id=course.id,
                course_code=course.course_code,
                name=course.name,
                credits=course.credits,
                student_count=len(store.get_enrollments_by_course(course.id)),
                average_score=avg,
                letter=letter_grade(avg),
                grade_distribution=grade_distribution(scores).by_letter(),
            )
        )

    rows.sort(key=lambda r: (-r.average_score, r.id))
    return rows


def filtered_distribution(
    store: RecordStore,
    course_id: int | None = None,
    term: str | None = None,
) -> GradeDistribution:
    """Band histogram over grades matching the optional course and term."""
    return grade_distribution(g.score for g in _grades_for(store, term=term, course_id=course_id))


def score_comparison(
    store: RecordStore,
    course_id: int | None = None,
    term: str | None = None,
) -> list[ScoreComparison]:
    """Average score per course, sorted by course name."""
    courses = store.list_courses()
    if course_id is not None:
        courses = [c for c in courses if c.id == course_id]

    grades = _grades_for(store, term=term)
    rows = [
        ScoreComparison(
            course_id=course.id,
            name=course.name,
            average_score=average_score(g.score for g in grades if g.course_id == course.id),
        )
        for course in courses
    ]
    rows.sort(key=lambda r: r.name)
    return rows
