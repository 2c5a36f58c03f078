"""Enrollment endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from records.db.store import RecordStore
from records.utils.validators import parse_record_id
from records.web.deps import get_store
from records.web.schemas import (
    EnrollmentCreate,
    EnrollmentListResponse,
    EnrollmentResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/enrollments", tags=["enrollments"])


@router.get("", response_model=EnrollmentListResponse)
async def list_enrollments(store: RecordStore = Depends(get_store)) -> EnrollmentListResponse:
    """List all enrollments."""
    enrollments = [EnrollmentResponse.model_validate(e) for e in store.list_enrollments()]
    return EnrollmentListResponse(enrollments=enrollments, count=len(enrollments))


@router.post("", response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
async def create_enrollment(
    enrollment_data: EnrollmentCreate,
    store: RecordStore = Depends(get_store),
) -> EnrollmentResponse:
    """Enroll a student in a course."""
    if store.get_student(enrollment_data.student_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Student not found",
        )

    if store.get_course(enrollment_data.course_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Course not found",
        )

    if store.has_enrollment(enrollment_data.student_id, enrollment_data.course_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Student is already enrolled in this course",
        )

    enrollment = store.create_enrollment(enrollment_data.to_input())
    logger.info(
        "enrollment_created",
        id=enrollment.id,
        student_id=enrollment.student_id,
        course_id=enrollment.course_id,
    )
    return EnrollmentResponse.model_validate(enrollment)


@router.delete("/{enrollment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_enrollment(
    enrollment_id: str,
    store: RecordStore = Depends(get_store),
) -> None:
    """Delete an enrollment."""
    if not store.delete_enrollment(parse_record_id(enrollment_id)):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Enrollment not found",
        )
