"""Record store layer for data access."""

from catalog.repositories.base import RecordStore, StoreTransaction
from catalog.repositories.factory import create_record_store
from catalog.repositories.file_repository import FileRepository
from catalog.repositories.memory_store import InMemoryRecordStore
from catalog.repositories.sqlite_store import SqliteRecordStore
from catalog.repositories.tag_repository import TagRepository

__all__ = [
    "RecordStore",
    "StoreTransaction",
    "create_record_store",
    "FileRepository",
    "TagRepository",
    "InMemoryRecordStore",
    "SqliteRecordStore",
]
