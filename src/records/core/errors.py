"""Exceptions raised by the records core."""

from __future__ import annotations


class RecordsError(Exception):
    """Base class for records core errors."""

    pass


class IntegrityFaultError(RecordsError):
    """Raised when a grade references a student or course that no longer exists.

    Cascade deletion should make this unreachable; when it happens the whole
    read is rejected instead of returning partial data.
    """

    def __init__(self, grade_id: int, missing: str, missing_id: int):
        self.grade_id = grade_id
        self.missing = missing
        self.missing_id = missing_id
        super().__init__(f"Grade {grade_id} has invalid references: {missing} {missing_id} not found")
