"""
Import Record domain model.
Tracks one lead-list upload through external processing.
"""
from datetime import datetime
from enum import Enum
from typing import Optional


class ImportStatus(str, Enum):
    """Lifecycle states of an import record."""
    PROCESSING = "processing"
    READY = "ready"
    FAILED = "failed"


class ImportRecord:
    """Domain model for lead list import tracking."""

    def __init__(
        self,
        name: str,
        county: str,
        state: str,
        source_file_url: str,
        status: ImportStatus = ImportStatus.PROCESSING,
        id: Optional[str] = None,
        file_url: Optional[str] = None,
        record_count: Optional[int] = None,
        error_message: Optional[str] = None,
        notes: Optional[str] = None,
        date_imported: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.name = name
        self.county = county
        self.state = state
        self.status = ImportStatus(status)
        self.source_file_url = source_file_url
        self.file_url = file_url
        self.record_count = record_count
        self.error_message = error_message
        self.notes = notes
        self.date_imported = date_imported
        self.created_at = created_at
        self.updated_at = updated_at

    @property
    def is_terminal(self) -> bool:
        return self.status != ImportStatus.PROCESSING

    @staticmethod
    def build_name(county: str, state: str, when: datetime) -> str:
        """Display label, e.g. 'Travis, TX - 3/7/2025'."""
        return f"{county}, {state} - {when.month}/{when.day}/{when.year}"

    def __repr__(self):
        return f"ImportRecord(id={self.id}, name={self.name}, status={self.status.value})"
