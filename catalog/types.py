"""Catalog data type definitions."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class FileDescriptor:
    """
    A file as submitted for ingestion.

    ``tags`` is None when the caller sent no tag list at all.
    """
    filename: str
    file_type: str
    path: str
    last_indexed_at: Optional[datetime] = None
    tags: Optional[List[str]] = None


@dataclass(frozen=True)
class FileRow:
    """
    Column values written for one file by an upsert.
    """
    filename: str
    file_type: str
    path: str
    created_at: datetime
    updated_at: datetime
    last_indexed_at: datetime


@dataclass(frozen=True)
class UpsertedFile:
    file_id: str
    path: str


@dataclass(frozen=True)
class TagRow:
    file_id: str
    name: str


@dataclass(frozen=True)
class FileTagRow:
    """
    One row of files LEFT JOIN tags. ``tag_name`` is None for untagged files.
    """
    file_id: str
    filename: str
    file_type: str
    path: str
    created_at: datetime
    updated_at: datetime
    last_indexed_at: datetime
    tag_name: Optional[str]


@dataclass(frozen=True)
class IngestOutcome:
    """
    Result of ingesting a single descriptor.
    """
    success: bool
    path: str
    file_id: Optional[str] = None
    action: Optional[str] = None
    error: Optional[str] = None


@dataclass
class FileRecord:
    """
    Complete metadata for a cataloged file, tags included.
    """
    file_id: str
    filename: str
    file_type: str
    path: str
    created_at: datetime
    updated_at: datetime
    last_indexed_at: datetime
    tags: List[str] = field(default_factory=list)
