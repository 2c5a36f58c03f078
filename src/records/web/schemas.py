"""Pydantic schemas for the Web API.

Request bodies for Student, Course, Enrollment and Grade, and response
models for records, enrichment views, dashboard stats and reports.

Update bodies are partial: omitted fields keep their stored value. Fields
that cannot be empty reject an explicit null.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from records.db.models import (
    CourseInput,
    CourseUpdate,
    EnrollmentInput,
    GradeInput,
    GradeUpdate,
    StudentInput,
    StudentUpdate,
)


class _PartialBody(BaseModel):
    """Base for update bodies; only explicitly sent fields are applied."""

    def sent_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


# =============================================================================
# STUDENT SCHEMAS
# =============================================================================


class StudentCreate(BaseModel):
    """Request body for creating a student."""

    student_code: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=200)
    year: int = Field(..., ge=1, le=4)
    avatar_url: str | None = Field(default=None, max_length=500)

    def to_input(self) -> StudentInput:
        return StudentInput(**self.model_dump())


class StudentUpdateRequest(_PartialBody):
    """Request body for a partial student update."""

    student_code: str = Field(default=None, min_length=1, max_length=20)
    name: str = Field(default=None, min_length=1, max_length=100)
    email: str = Field(default=None, min_length=3, max_length=200)
    year: int = Field(default=None, ge=1, le=4)
    avatar_url: str | None = Field(default=None, max_length=500)

    def to_update(self) -> StudentUpdate:
        return StudentUpdate(**self.sent_fields())


class StudentResponse(BaseModel):
    """Response for a plain student record."""

    id: int
    student_code: str
    name: str
    email: str
    year: int
    avatar_url: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class CourseRefResponse(BaseModel):
    id: int
    course_code: str
    name: str

    model_config = {"from_attributes": True}


class StudentWithCoursesResponse(StudentResponse):
    """Student with enrolled courses and average grade."""

    courses: list[CourseRefResponse] = Field(default_factory=list)
    average_grade: float = 0.0


class StudentListResponse(BaseModel):
    """Response for list of students."""

    students: list[StudentWithCoursesResponse]
    count: int


# =============================================================================
# COURSE SCHEMAS
# =============================================================================


class CourseCreate(BaseModel):
    """Request body for creating a course."""

    course_code: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    credits: int = Field(..., ge=1, le=30)

    def to_input(self) -> CourseInput:
        return CourseInput(**self.model_dump())


class CourseUpdateRequest(_PartialBody):
    """Request body for a partial course update."""

    course_code: str = Field(default=None, min_length=1, max_length=20)
    name: str = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    credits: int = Field(default=None, ge=1, le=30)

    def to_update(self) -> CourseUpdate:
        return CourseUpdate(**self.sent_fields())


class CourseResponse(BaseModel):
    """Response for a plain course record."""

    id: int
    course_code: str
    name: str
    description: str | None = None
    credits: int
    created_at: datetime

    model_config = {"from_attributes": True}


class StudentRefResponse(BaseModel):
    id: int
    student_code: str
    name: str

    model_config = {"from_attributes": True}


class CourseWithStudentsResponse(CourseResponse):
    """Course with enrolled students and average grade."""

    students: list[StudentRefResponse] = Field(default_factory=list)
    average_grade: float = 0.0


class CourseListResponse(BaseModel):
    """Response for list of courses."""

    courses: list[CourseWithStudentsResponse]
    count: int


# =============================================================================
# ENROLLMENT SCHEMAS
# =============================================================================


class EnrollmentCreate(BaseModel):
    """Request body for enrolling a student in a course."""

    student_id: int = Field(..., ge=1)
    course_id: int = Field(..., ge=1)

    def to_input(self) -> EnrollmentInput:
        return EnrollmentInput(**self.model_dump())


class EnrollmentResponse(BaseModel):
    id: int
    student_id: int
    course_id: int
    enrollment_date: datetime

    model_config = {"from_attributes": True}


class EnrollmentListResponse(BaseModel):
    enrollments: list[EnrollmentResponse]
    count: int


# =============================================================================
# GRADE SCHEMAS
# =============================================================================


class GradeCreate(BaseModel):
    """Request body for recording a grade."""

    student_id: int = Field(..., ge=1)
    course_id: int = Field(..., ge=1)
    score: float = Field(..., ge=0, le=100)
    term: str = Field(..., min_length=1, max_length=50)

    def to_input(self) -> GradeInput:
        return GradeInput(**self.model_dump())


class GradeUpdateRequest(_PartialBody):
    """Request body for a partial grade update."""

    student_id: int = Field(default=None, ge=1)
    course_id: int = Field(default=None, ge=1)
    score: float = Field(default=None, ge=0, le=100)
    term: str = Field(default=None, min_length=1, max_length=50)

    def to_update(self) -> GradeUpdate:
        return GradeUpdate(**self.sent_fields())


class GradeResponse(BaseModel):
    """Response for a plain grade record."""

    id: int
    student_id: int
    course_id: int
    score: float
    term: str
    graded_date: datetime

    model_config = {"from_attributes": True}


class FullGradeResponse(GradeResponse):
    """Grade with embedded student and course references."""

    student: StudentRefResponse
    course: CourseRefResponse


class GradeListResponse(BaseModel):
    grades: list[FullGradeResponse]
    count: int


# =============================================================================
# DASHBOARD SCHEMAS
# =============================================================================


class GradeDistributionResponse(BaseModel):
    labels: list[str]
    data: list[int]

    model_config = {"from_attributes": True}


class TopStudentResponse(BaseModel):
    id: int
    name: str
    average_grade: float

    model_config = {"from_attributes": True}


class ActivityItemResponse(BaseModel):
    type: str
    message: str
    timestamp: str

    model_config = {"from_attributes": True}


class DashboardStatsResponse(BaseModel):
    """Dashboard summary statistics."""

    total_students: int
    active_courses: int
    average_grade: float
    pending_grades: int
    grade_distribution: GradeDistributionResponse
    top_students: list[TopStudentResponse]
    recent_activity: list[ActivityItemResponse]

    model_config = {"from_attributes": True}


# =============================================================================
# REPORT SCHEMAS
# =============================================================================


class StudentPerformanceResponse(BaseModel):
    id: int
    student_code: str
    name: str
    year: int
    course_count: int
    average_score: float
    letter: str

    model_config = {"from_attributes": True}


class CoursePerformanceResponse(BaseModel):
    id: int
    course_code: str
    name: str
    credits: int
    student_count: int
    average_score: float
    letter: str
    grade_distribution: dict[str, int]

    model_config = {"from_attributes": True}


class ScoreComparisonResponse(BaseModel):
    course_id: int
    name: str
    average_score: float

    model_config = {"from_attributes": True}


class TermListResponse(BaseModel):
    terms: list[str]
    count: int


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: str
