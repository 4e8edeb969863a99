"""Record store construction from configuration."""

from typing import Optional

from common.logging_config import get_logger
from catalog.config import DATABASE_PATH, STORE_BACKEND
from catalog.exceptions import UnknownStoreBackendError
from catalog.repositories.base import RecordStore
from catalog.repositories.memory_store import InMemoryRecordStore
from catalog.repositories.sqlite_store import SqliteRecordStore

logger = get_logger(__name__)

STORE_BACKENDS = ("sqlite", "memory")


def create_record_store(backend: Optional[str] = None, database_path: Optional[str] = None) -> RecordStore:
    """
    Build a record store for the named backend.

    Args:
        backend: "sqlite" or "memory". Defaults to CATALOG_STORE_BACKEND
        database_path: SQLite file path. Defaults to CATALOG_DATABASE_PATH

    Returns:
        A ready-to-use RecordStore

    Raises:
        UnknownStoreBackendError: If the backend name is not recognised
    """
    backend = (backend or STORE_BACKEND).strip().lower()
    logger.info(f"Creating record store [backend={backend}]")

    if backend == "sqlite":
        return SqliteRecordStore(database_path or DATABASE_PATH)
    if backend == "memory":
        return InMemoryRecordStore()

    raise UnknownStoreBackendError(
        f"Unknown store backend '{backend}', expected one of: {', '.join(STORE_BACKENDS)}"
    )
