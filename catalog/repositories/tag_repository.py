"""Tag repository for database operations."""

import sqlite3
from typing import Sequence

from common.logging_config import get_logger
from catalog.types import TagRow
from catalog.utils import generate_uuid

logger = get_logger(__name__)

# Stays under SQLite's bound-parameter limit on older builds (999).
DELETE_CHUNK_SIZE = 500


class TagRepository:
    @staticmethod
    def delete_tags_for_files(file_ids: Sequence[str], conn: sqlite3.Connection) -> int:
        if not file_ids:
            return 0

        cursor = conn.cursor()
        deleted = 0
        for start in range(0, len(file_ids), DELETE_CHUNK_SIZE):
            chunk = list(file_ids[start:start + DELETE_CHUNK_SIZE])
            placeholders = ','.join('?' for _ in chunk)
            cursor.execute(f"DELETE FROM tags WHERE file_id IN ({placeholders})", chunk)
            deleted += cursor.rowcount
        logger.debug(f"Deleted {deleted} tags for {len(file_ids)} files")
        return deleted

    @staticmethod
    def insert_tags(tags: Sequence[TagRow], conn: sqlite3.Connection) -> None:
        if not tags:
            return

        cursor = conn.cursor()
        cursor.executemany(
            "INSERT INTO tags (tag_id, file_id, name) VALUES (?, ?, ?)",
            [(generate_uuid(), tag.file_id, tag.name) for tag in tags]
        )
        logger.debug(f"Inserted {len(tags)} tags")
