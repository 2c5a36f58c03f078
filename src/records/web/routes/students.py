"""Student endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from records.core.enrichment import all_students_with_courses, student_with_courses
from records.db.store import RecordStore
from records.utils.validators import parse_record_id, validate_email
from records.web.deps import get_store
from records.web.schemas import (
    StudentCreate,
    StudentListResponse,
    StudentResponse,
    StudentUpdateRequest,
    StudentWithCoursesResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/students", tags=["students"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Student not found",
    )


def _check_email(email: str) -> None:
    if not validate_email(email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid email format",
        )


@router.get("", response_model=StudentListResponse)
async def list_students(store: RecordStore = Depends(get_store)) -> StudentListResponse:
    """List all students with their courses and average grade."""
    students = [
        StudentWithCoursesResponse.model_validate(s)
        for s in all_students_with_courses(store)
    ]
    return StudentListResponse(students=students, count=len(students))


@router.get("/{student_id}", response_model=StudentWithCoursesResponse)
async def get_student(
    student_id: str,
    store: RecordStore = Depends(get_store),
) -> StudentWithCoursesResponse:
    """Get a specific student by ID."""
    view = student_with_courses(store, parse_record_id(student_id))
    if view is None:
        raise _not_found()
    return StudentWithCoursesResponse.model_validate(view)


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
async def create_student(
    student_data: StudentCreate,
    store: RecordStore = Depends(get_store),
) -> StudentResponse:
    """Create a new student."""
    _check_email(student_data.email)

    if store.get_student_by_code(student_data.student_code):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Student ID already exists",
        )

    if store.get_student_by_email(student_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already exists",
        )

    student = store.create_student(student_data.to_input())
    logger.info("student_created", id=student.id, student_code=student.student_code)
    return StudentResponse.model_validate(student)


@router.put("/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: str,
    student_data: StudentUpdateRequest,
    store: RecordStore = Depends(get_store),
) -> StudentResponse:
    """Partially update a student. Omitted fields are left unchanged."""
    record_id = parse_record_id(student_id)
    update = student_data.to_update()

    existing = store.get_student(record_id)
    if existing is None:
        raise _not_found()

    # Uniqueness is only checked when the key actually changes
    new_code = update.changes().get("student_code")
    if new_code and new_code != existing.student_code and store.get_student_by_code(new_code):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Student ID already exists",
        )

    new_email = update.changes().get("email")
    if new_email and new_email != existing.email:
        _check_email(new_email)
        if store.get_student_by_email(new_email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already exists",
            )

    updated = store.update_student(record_id, update)
    if updated is None:
        raise _not_found()
    return StudentResponse.model_validate(updated)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(
    student_id: str,
    store: RecordStore = Depends(get_store),
) -> None:
    """Delete a student with their enrollments and grades."""
    if not store.delete_student(parse_record_id(student_id)):
        raise _not_found()
