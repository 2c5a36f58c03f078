"""Academic records manager.

In-memory store for students, courses, enrollments and grades, with
enrichment views, dashboard statistics and reports served over FastAPI.
"""

__version__ = "0.1.0"
