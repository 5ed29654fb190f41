"""Learning-progress persistence."""

from xsspage.core.progress.store import (
    COMPLETED,
    IN_PROGRESS,
    NOT_STARTED,
    SCHEMA_VERSION,
    STORAGE_KEY,
    ProgressStore,
    default_document,
)

__all__ = [
    "COMPLETED",
    "IN_PROGRESS",
    "NOT_STARTED",
    "SCHEMA_VERSION",
    "STORAGE_KEY",
    "ProgressStore",
    "default_document",
]
