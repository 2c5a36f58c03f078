"""Record types held by the in-memory store.

Four entity kinds, each with an input type (caller-supplied fields) and,
where the entity is mutable, a partial update type.

Partial updates use the UNSET sentinel so that an omitted field and a field
explicitly cleared to None can be told apart:

    StudentUpdate(name="Ana")            # only name changes
    StudentUpdate(avatar_url=None)       # avatar_url is cleared
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any


class _Unset:
    """Marker for a field that was not provided in a partial update."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


# =============================================================================
# STORED RECORDS
# =============================================================================


@dataclass
class Student:
    """A student. student_code is the natural key (e.g. "S1001")."""

    id: int
    student_code: str
    name: str
    email: str
    year: int
    created_at: datetime
    avatar_url: str | None = None


@dataclass
class Course:
    """A course. course_code is the natural key (e.g. "MATH101")."""

    id: int
    course_code: str
    name: str
    credits: int
    created_at: datetime
    description: str | None = None


@dataclass
class Enrollment:
    """Link between a student and a course (store ids, not natural keys)."""

    id: int
    student_id: int
    course_id: int
    enrollment_date: datetime


@dataclass
class Grade:
    """Score obtained by a student in a course for a term."""

    id: int
    student_id: int
    course_id: int
    score: float
    term: str
    graded_date: datetime


# =============================================================================
# INPUTS
# =============================================================================


@dataclass
class StudentInput:
    student_code: str
    name: str
    email: str
    year: int
    avatar_url: str | None = None


@dataclass
class CourseInput:
    course_code: str
    name: str
    credits: int
    description: str | None = None


@dataclass
class EnrollmentInput:
    student_id: int
    course_id: int


@dataclass
class GradeInput:
    student_id: int
    course_id: int
    score: float
    term: str


# =============================================================================
# PARTIAL UPDATES
# =============================================================================


class _PartialUpdate:
    """Mixin for update dataclasses whose fields default to UNSET."""

    def changes(self) -> dict[str, Any]:
        """Return only the fields that were provided."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)  # type: ignore[arg-type]
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.changes()


@dataclass
class StudentUpdate(_PartialUpdate):
    student_code: str = UNSET
    name: str = UNSET
    email: str = UNSET
    year: int = UNSET
    avatar_url: str | None = UNSET


@dataclass
class CourseUpdate(_PartialUpdate):
    course_code: str = UNSET
    name: str = UNSET
    credits: int = UNSET
    description: str | None = UNSET


@dataclass
class GradeUpdate(_PartialUpdate):
    student_id: int = UNSET
    course_id: int = UNSET
    score: float = UNSET
    term: str = UNSET
