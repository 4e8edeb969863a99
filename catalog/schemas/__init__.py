"""Pydantic schemas for API requests and responses."""

from catalog.schemas.files import (
    FileDescriptorRequest,
    IngestFilesRequest,
    IngestOutcomeResponse,
    IngestSummary,
    IngestFilesResponse,
    FileRecordResponse,
    ListFilesResponse
)
from catalog.schemas.common import ErrorResponse, ValidationErrorItem, ValidationErrorResponse

__all__ = [
    "FileDescriptorRequest",
    "IngestFilesRequest",
    "IngestOutcomeResponse",
    "IngestSummary",
    "IngestFilesResponse",
    "FileRecordResponse",
    "ListFilesResponse",
    "ErrorResponse",
    "ValidationErrorItem",
    "ValidationErrorResponse"
]
