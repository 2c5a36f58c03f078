"""FastAPI application factory.

Main entry point for the Academic Records Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from records.config.app_config import AppConfig, load_app_config
from records.core.errors import IntegrityFaultError
from records.db.demo_data import create_store
from records.db.store import RecordStore
from records.utils.validators import InvalidRecordIdError
from records.web.routes import (
    courses_router,
    dashboard_router,
    enrollments_router,
    grades_router,
    health_router,
    reports_router,
    students_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    store: RecordStore = app.state.store
    logger.info(
        "api_startup",
        students=len(store.list_students()),
        courses=len(store.list_courses()),
        enrollments=len(store.list_enrollments()),
        grades=len(store.list_grades()),
    )
    yield
    logger.info("api_shutdown")


async def _invalid_id_handler(request: Request, exc: InvalidRecordIdError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid ID format"},
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    logger.info("request_validation_failed", path=request.url.path, errors=len(errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": [
            {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
            for e in errors
        ]},
    )


async def _integrity_fault_handler(request: Request, exc: IntegrityFaultError) -> JSONResponse:
    logger.error(
        "api_error",
        path=request.url.path,
        error=str(exc),
        grade_id=exc.grade_id,
        missing=exc.missing,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("api_error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc) or "An unexpected error occurred"},
    )


def create_app(
    store: RecordStore | None = None,
    config: AppConfig | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Store to serve. If None, a new one is built (seeded with the
            demo dataset unless disabled in config).
        config: Application config. If None, loaded from disk.

    Returns:
        Configured FastAPI app instance
    """
    config = config or load_app_config()
    if store is None:
        store = create_store(seed=config.store.seed_demo_data)

    app = FastAPI(
        title=config.api.title,
        description="CRUD and reporting API for students, courses, enrollments and grades",
        version=config.api.version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.config = config

    # CORS middleware for web clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InvalidRecordIdError, _invalid_id_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(IntegrityFaultError, _integrity_fault_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    # Include routers
    app.include_router(health_router)
    app.include_router(students_router)
    app.include_router(courses_router)
    app.include_router(enrollments_router)
    app.include_router(grades_router)
    app.include_router(dashboard_router)
    app.include_router(reports_router)

    return app
