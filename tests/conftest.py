"""Shared fixtures for the records test suite.

Tests are grouped by layer:
- store: RecordStore and demo data
- core: scoring, enrichment, aggregation, config
- web: FastAPI routes through TestClient
- cli: typer commands through CliRunner
"""

import pytest
from fastapi.testclient import TestClient

from records.config.app_config import AppConfig, clear_config_cache
from records.db.demo_data import create_store
from records.db.models import CourseInput, EnrollmentInput, GradeInput, StudentInput
from records.db.store import RecordStore
from records.web.api import create_app


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config loading at a missing file so defaults are used."""
    monkeypatch.setenv("RECORDS_CONFIG", str(tmp_path / "missing.yaml"))
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def store() -> RecordStore:
    """Empty store."""
    return RecordStore()


@pytest.fixture
def seeded_store() -> RecordStore:
    """Store loaded with the demo dataset."""
    return create_store(seed=True)


@pytest.fixture
def student_input():
    def _make(code="S1", name="Ana Torres", email=None, year=2, avatar_url=None):
        return StudentInput(
            student_code=code,
            name=name,
            email=email or f"{code.lower()}@example.com",
            year=year,
            avatar_url=avatar_url,
        )

    return _make


@pytest.fixture
def course_input():
    def _make(code="MATH101", name="Mathematics 101", credits=3, description=None):
        return CourseInput(course_code=code, name=name, credits=credits, description=description)

    return _make


@pytest.fixture
def enroll_and_grade():
    """Enroll a student in a course and record a grade."""

    def _do(store, student_id, course_id, score, term="Spring 2023"):
        store.create_enrollment(EnrollmentInput(student_id=student_id, course_id=course_id))
        return store.create_grade(
            GradeInput(student_id=student_id, course_id=course_id, score=score, term=term)
        )

    return _do


@pytest.fixture
def empty_client(store) -> TestClient:
    """Client for an app backed by an empty store."""
    return TestClient(create_app(store=store, config=AppConfig()))


@pytest.fixture
def client(seeded_store) -> TestClient:
    """Client for an app backed by the demo dataset."""
    return TestClient(create_app(store=seeded_store, config=AppConfig()))
