"""Report endpoints.

All reports accept an optional term filter; distribution and comparison
also accept a course filter.
"""

from fastapi import APIRouter, Depends, Query

from records.core.aggregation import (
    course_performance,
    filtered_distribution,
    score_comparison,
    student_performance,
)
from records.db.store import RecordStore
from records.web.deps import get_store
from records.web.schemas import (
    CoursePerformanceResponse,
    GradeDistributionResponse,
    ScoreComparisonResponse,
    StudentPerformanceResponse,
    TermListResponse,
)

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/students", response_model=list[StudentPerformanceResponse])
async def get_student_performance(
    term: str | None = Query(default=None),
    store: RecordStore = Depends(get_store),
) -> list[StudentPerformanceResponse]:
    """Per-student averages, best first."""
    return [StudentPerformanceResponse.model_validate(r) for r in student_performance(store, term)]


@router.get("/courses", response_model=list[CoursePerformanceResponse])
async def get_course_performance(
    term: str | None = Query(default=None),
    store: RecordStore = Depends(get_store),
) -> list[CoursePerformanceResponse]:
    """Per-course averages and band counts, best first."""
    return [CoursePerformanceResponse.model_validate(r) for r in course_performance(store, term)]


@router.get("/distribution", response_model=GradeDistributionResponse)
async def get_distribution(
    course_id: int | None = Query(default=None, ge=1),
    term: str | None = Query(default=None),
    store: RecordStore = Depends(get_store),
) -> GradeDistributionResponse:
    """Grade band histogram, optionally filtered."""
    distribution = filtered_distribution(store, course_id=course_id, term=term)
    return GradeDistributionResponse.model_validate(distribution)


@router.get("/comparison", response_model=list[ScoreComparisonResponse])
async def get_score_comparison(
    course_id: int | None = Query(default=None, ge=1),
    term: str | None = Query(default=None),
    store: RecordStore = Depends(get_store),
) -> list[ScoreComparisonResponse]:
    """Average score per course, by course name."""
    rows = score_comparison(store, course_id=course_id, term=term)
    return [ScoreComparisonResponse.model_validate(r) for r in rows]


@router.get("/terms", response_model=TermListResponse)
async def list_terms(store: RecordStore = Depends(get_store)) -> TermListResponse:
    """Distinct terms that have grades."""
    terms = store.list_terms()
    return TermListResponse(terms=terms, count=len(terms))
