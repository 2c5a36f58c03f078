"""Record storage.

Provides:
- Record types (Student, Course, Enrollment, Grade) and their inputs/updates
- RecordStore, the in-memory store with cascade deletion
- Demo dataset seeding
"""

from records.db.demo_data import create_store, seed_demo_data
from records.db.store import RecordStore

__all__ = ["RecordStore", "create_store", "seed_demo_data"]
