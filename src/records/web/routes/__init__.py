"""Route handlers for the Web API."""

from records.web.routes.courses import router as courses_router
from records.web.routes.dashboard import router as dashboard_router
from records.web.routes.enrollments import router as enrollments_router
from records.web.routes.grades import router as grades_router
from records.web.routes.health import router as health_router
from records.web.routes.reports import router as reports_router
from records.web.routes.students import router as students_router

__all__ = [
    "courses_router",
    "dashboard_router",
    "enrollments_router",
    "grades_router",
    "health_router",
    "reports_router",
    "students_router",
]
