"""Grade endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from records.core.enrichment import all_full_grades
from records.db.store import RecordStore
from records.utils.validators import parse_record_id
from records.web.deps import get_store
from records.web.schemas import (
    FullGradeResponse,
    GradeCreate,
    GradeListResponse,
    GradeResponse,
    GradeUpdateRequest,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/grades", tags=["grades"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Grade not found",
    )


def _check_enrolled(store: RecordStore, student_id: int, course_id: int) -> None:
    """Raise 400 unless both records exist and the student is enrolled."""
    if store.get_student(student_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Student not found",
        )

    if store.get_course(course_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Course not found",
        )

    if not store.has_enrollment(student_id, course_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Student is not enrolled in this course",
        )


@router.get("", response_model=GradeListResponse)
async def list_grades(store: RecordStore = Depends(get_store)) -> GradeListResponse:
    """List all grades with student and course references."""
    grades = [FullGradeResponse.model_validate(g) for g in all_full_grades(store)]
    return GradeListResponse(grades=grades, count=len(grades))


@router.get("/{grade_id}", response_model=GradeResponse)
async def get_grade(
    grade_id: str,
    store: RecordStore = Depends(get_store),
) -> GradeResponse:
    """Get a specific grade by ID."""
    grade = store.get_grade(parse_record_id(grade_id))
    if grade is None:
        raise _not_found()
    return GradeResponse.model_validate(grade)


@router.post("", response_model=GradeResponse, status_code=status.HTTP_201_CREATED)
async def create_grade(
    grade_data: GradeCreate,
    store: RecordStore = Depends(get_store),
) -> GradeResponse:
    """Record a grade. The student must be enrolled in the course."""
    _check_enrolled(store, grade_data.student_id, grade_data.course_id)

    grade = store.create_grade(grade_data.to_input())
    logger.info(
        "grade_created",
        id=grade.id,
        student_id=grade.student_id,
        course_id=grade.course_id,
        score=grade.score,
    )
    return GradeResponse.model_validate(grade)


@router.put("/{grade_id}", response_model=GradeResponse)
async def update_grade(
    grade_id: str,
    grade_data: GradeUpdateRequest,
    store: RecordStore = Depends(get_store),
) -> GradeResponse:
    """Partially update a grade (typically score or term).

    Moving a grade to another student or course requires the new pair
    to be enrolled, same as when recording it.
    """
    current = store.get_grade(parse_record_id(grade_id))
    if current is None:
        raise _not_found()

    update = grade_data.to_update()
    changes = update.changes()
    if "student_id" in changes or "course_id" in changes:
        _check_enrolled(
            store,
            changes.get("student_id", current.student_id),
            changes.get("course_id", current.course_id),
        )

    updated = store.update_grade(current.id, update)
    if updated is None:
        raise _not_found()
    logger.info("grade_updated", id=updated.id, fields=sorted(changes))
    return GradeResponse.model_validate(updated)


@router.delete("/{grade_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_grade(
    grade_id: str,
    store: RecordStore = Depends(get_store),
) -> None:
    """Delete a grade."""
    if not store.delete_grade(parse_record_id(grade_id)):
        raise _not_found()
