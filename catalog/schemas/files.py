"""Pydantic schemas for file catalog endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from catalog.schemas.common import CamelModel
from catalog.types import FileDescriptor, FileRecord, IngestOutcome


class FileDescriptorRequest(CamelModel):
    """A single file submitted for ingestion."""
    filename: str = Field(..., min_length=1)
    file_type: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1)
    last_indexed_at: Optional[datetime] = None
    tags: Optional[List[str]] = None

    @field_validator("last_indexed_at", mode="before")
    @classmethod
    def parse_iso_timestamp(cls, value):
        """Accept only ISO-8601 date-time strings; bare dates and epoch numbers are rejected."""
        if value is None:
            return value
        if not isinstance(value, str) or "T" not in value:
            raise ValueError("must be an ISO-8601 date-time string")
        if value.endswith(("Z", "z")):
            value = value[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            raise ValueError("must be an ISO-8601 date-time string") from None

    def to_descriptor(self) -> FileDescriptor:
        return FileDescriptor(
            filename=self.filename,
            file_type=self.file_type,
            path=self.path,
            last_indexed_at=self.last_indexed_at,
            tags=self.tags,
        )


class IngestFilesRequest(CamelModel):
    """Request model for batch ingestion."""
    files: List[FileDescriptorRequest]


class IngestOutcomeResponse(CamelModel):
    """Per-file ingestion result."""
    success: bool
    path: str
    file_id: Optional[str] = None
    action: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: IngestOutcome) -> "IngestOutcomeResponse":
        return cls(
            success=outcome.success,
            path=outcome.path,
            file_id=outcome.file_id,
            action=outcome.action,
            error=outcome.error,
        )


class IngestSummary(CamelModel):
    total: int
    successful: int
    failed: int


class IngestFilesResponse(CamelModel):
    """Response model for batch ingestion."""
    message: str
    summary: IngestSummary
    results: List[IngestOutcomeResponse]


class FileRecordResponse(CamelModel):
    """Response model for a cataloged file."""
    id: str
    filename: str
    file_type: str
    path: str
    created_at: datetime
    updated_at: datetime
    last_indexed_at: datetime
    tags: List[str]

    @classmethod
    def from_record(cls, record: FileRecord) -> "FileRecordResponse":
        return cls(
            id=record.file_id,
            filename=record.filename,
            file_type=record.file_type,
            path=record.path,
            created_at=record.created_at,
            updated_at=record.updated_at,
            last_indexed_at=record.last_indexed_at,
            tags=record.tags,
        )


class ListFilesResponse(CamelModel):
    """Response model for file listing."""
    files: List[FileRecordResponse]
    count: int
