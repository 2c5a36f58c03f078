"""Demo dataset loaded into a fresh store.

5 courses, 4 students, 9 enrollments and 9 grades for "Spring 2023".
Enrollment and grade rows reference the ids assigned when seeding an empty
store (courses 1-5, students 1-4).
"""

from __future__ import annotations

import structlog

from records.db.models import CourseInput, EnrollmentInput, GradeInput, StudentInput
from records.db.store import RecordStore

logger = structlog.get_logger(__name__)

DEMO_TERM = "Spring 2023"

DEMO_COURSES = [
    CourseInput("MATH101", "Mathematics 101", 3, "Introduction to advanced mathematics"),
    CourseInput("ENG201", "English 201", 3, "Composition and Literature"),
    CourseInput("SCI301", "Science 301", 4, "Applied Physics"),
    CourseInput("HIS202", "History 202", 3, "World History"),
    CourseInput("PHY301", "Physics 301", 4, "Advanced Physics"),
]

DEMO_STUDENTS = [
    StudentInput("S1001", "Emily Johnson", "emily.johnson@example.com", 3, "https://i.pravatar.cc/150?img=1"),
    StudentInput("S1002", "Daniel Smith", "daniel.smith@example.com", 2, "https://i.pravatar.cc/150?img=2"),
    StudentInput("S1003", "Sophia Martinez", "sophia.martinez@example.com", 4, "https://i.pravatar.cc/150?img=3"),
    StudentInput("S1004", "Michael Brown", "michael.brown@example.com", 1, "https://i.pravatar.cc/150?img=4"),
]

# (student_id, course_id, score)
DEMO_RESULTS = [
    (1, 1, 98.5),  # Emily - Math 101
    (1, 3, 97.8),  # Emily - Science 301
    (1, 4, 99.2),  # Emily - History 202
    (2, 2, 96.2),  # Daniel - English 201
    (2, 3, 96.0),  # Daniel - Science 301
    (3, 1, 95.7),  # Sophia - Math 101
    (3, 4, 95.8),  # Sophia - History 202
    (4, 2, 75.8),  # Michael - English 201
    (4, 5, 73.8),  # Michael - Physics 301
]


def seed_demo_data(store: RecordStore) -> None:
    """Load the demo dataset into an empty store."""
    for course in DEMO_COURSES:
        store.create_course(course)

    for student in DEMO_STUDENTS:
        store.create_student(student)

    for student_id, course_id, _ in DEMO_RESULTS:
        store.create_enrollment(EnrollmentInput(student_id=student_id, course_id=course_id))

    for student_id, course_id, score in DEMO_RESULTS:
        store.create_grade(
            GradeInput(student_id=student_id, course_id=course_id, score=score, term=DEMO_TERM)
        )

    logger.info(
        "demo_data_seeded",
        courses=len(DEMO_COURSES),
        students=len(DEMO_STUDENTS),
        enrollments=len(DEMO_RESULTS),
        grades=len(DEMO_RESULTS),
    )


def create_store(seed: bool = True) -> RecordStore:
    """Build a new store, optionally loaded with the demo dataset.

    Args:
        seed: If True, load the demo dataset.

    Returns:
        A fresh RecordStore instance.
    """
    store = RecordStore()
    if seed:
        seed_demo_data(store)
    return store
