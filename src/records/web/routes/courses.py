"""Course endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from records.core.enrichment import all_courses_with_students, course_with_students
from records.db.store import RecordStore
from records.utils.validators import parse_record_id
from records.web.deps import get_store
from records.web.schemas import (
    CourseCreate,
    CourseListResponse,
    CourseResponse,
    CourseUpdateRequest,
    CourseWithStudentsResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/courses", tags=["courses"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Course not found",
    )


def _duplicate_code() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Course ID already exists",
    )


@router.get("", response_model=CourseListResponse)
async def list_courses(store: RecordStore = Depends(get_store)) -> CourseListResponse:
    """List all courses with their students and average grade."""
    courses = [
        CourseWithStudentsResponse.model_validate(c)
        for c in all_courses_with_students(store)
    ]
    return CourseListResponse(courses=courses, count=len(courses))


@router.get("/{course_id}", response_model=CourseWithStudentsResponse)
async def get_course(
    course_id: str,
    store: RecordStore = Depends(get_store),
) -> CourseWithStudentsResponse:
    """Get a specific course by ID."""
    view = course_with_students(store, parse_record_id(course_id))
    if view is None:
        raise _not_found()
    return CourseWithStudentsResponse.model_validate(view)


@router.post("", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
async def create_course(
    course_data: CourseCreate,
    store: RecordStore = Depends(get_store),
) -> CourseResponse:
    """Create a new course."""
    if store.get_course_by_code(course_data.course_code):
        raise _duplicate_code()

    course = store.create_course(course_data.to_input())
    logger.info("course_created", id=course.id, course_code=course.course_code)
    return CourseResponse.model_validate(course)


@router.put("/{course_id}", response_model=CourseResponse)
async def update_course(
    course_id: str,
    course_data: CourseUpdateRequest,
    store: RecordStore = Depends(get_store),
) -> CourseResponse:
    """Partially update a course. Omitted fields are left unchanged."""
    record_id = parse_record_id(course_id)
    update = course_data.to_update()

    existing = store.get_course(record_id)
    if existing is None:
        raise _not_found()

    new_code = update.changes().get("course_code")
    if new_code and new_code != existing.course_code and store.get_course_by_code(new_code):
        raise _duplicate_code()

    updated = store.update_course(record_id, update)
    if updated is None:
        raise _not_found()
    return CourseResponse.model_validate(updated)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course(
    course_id: str,
    store: RecordStore = Depends(get_store),
) -> None:
    """Delete a course with its enrollments and grades."""
    if not store.delete_course(parse_record_id(course_id)):
        raise _not_found()
