"""SQLite-backed record store."""

import sqlite3
from contextlib import contextmanager
from typing import Generator, List, Sequence

from common.logging_config import get_logger
from catalog.database import get_db_connection, init_database
from catalog.exceptions import StorageError
from catalog.repositories.base import RecordStore, StoreTransaction
from catalog.repositories.file_repository import FileRepository
from catalog.repositories.tag_repository import TagRepository
from catalog.types import FileRow, FileTagRow, TagRow, UpsertedFile

logger = get_logger(__name__)


class SqliteTransaction(StoreTransaction):
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def upsert_files(self, rows: Sequence[FileRow]) -> List[UpsertedFile]:
        return FileRepository.upsert_files(rows, self.conn)

    def delete_tags_for_files(self, file_ids: Sequence[str]) -> int:
        return TagRepository.delete_tags_for_files(file_ids, self.conn)

    def insert_tags(self, tags: Sequence[TagRow]) -> None:
        TagRepository.insert_tags(tags, self.conn)


class SqliteRecordStore(RecordStore):
    backend_name = "sqlite"

    def __init__(self, database_path: str):
        self.database_path = database_path
        try:
            init_database(database_path)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot initialize database at {database_path}: {e}") from e
        logger.info(f"SQLite record store ready [path={database_path}]")

    @contextmanager
    def transaction(self) -> Generator[SqliteTransaction, None, None]:
        try:
            with get_db_connection(self.database_path) as conn:
                conn.isolation_level = None
                # IMMEDIATE takes the write lock up front; concurrent
                # batches wait on the connection timeout.
                conn.execute("BEGIN IMMEDIATE")
                try:
                    yield SqliteTransaction(conn)
                    conn.commit()
                except Exception:
                    conn.rollback()
                    raise
        except sqlite3.Error as e:
            logger.error(f"SQLite transaction failed: {e}", exc_info=True)
            raise StorageError(str(e)) from e

    def list_files_with_tags(self) -> List[FileTagRow]:
        try:
            with get_db_connection(self.database_path) as conn:
                return FileRepository.list_with_tags(conn)
        except sqlite3.Error as e:
            logger.error(f"Failed to list files: {e}", exc_info=True)
            raise StorageError(str(e)) from e

    def ping(self) -> None:
        try:
            with get_db_connection(self.database_path) as conn:
                conn.execute("SELECT 1").fetchone()
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
