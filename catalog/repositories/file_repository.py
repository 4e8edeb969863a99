"""File repository for database operations."""

import sqlite3
from datetime import datetime
from typing import List, Sequence

from common.logging_config import get_logger
from catalog.types import FileRow, FileTagRow, UpsertedFile
from catalog.utils import generate_uuid

logger = get_logger(__name__)

# Columns overwritten when an incoming row hits an existing path.
# created_at and file_id keep their first-insert values.
UPSERT_UPDATE_COLUMNS = ("filename", "file_type", "updated_at", "last_indexed_at")

_UPSERT_SQL = """
    INSERT INTO files (file_id, filename, file_type, path, created_at, updated_at, last_indexed_at)
    VALUES (?, ?, ?, ?, ?, ?, ?)
    ON CONFLICT(path) DO UPDATE SET {assignments}
    RETURNING file_id, path
""".format(
    assignments=", ".join(f"{column} = excluded.{column}" for column in UPSERT_UPDATE_COLUMNS)
)


class FileRepository:
    @staticmethod
    def upsert_files(rows: Sequence[FileRow], conn: sqlite3.Connection) -> List[UpsertedFile]:
        logger.debug(f"Upserting {len(rows)} files")
        cursor = conn.cursor()
        upserted = []
        for row in rows:
            cursor.execute(
                _UPSERT_SQL,
                (
                    generate_uuid(),
                    row.filename,
                    row.file_type,
                    row.path,
                    row.created_at.isoformat(),
                    row.updated_at.isoformat(),
                    row.last_indexed_at.isoformat(),
                )
            )
            # fetchall steps the statement to completion so nothing is left
            # pending at COMMIT.
            for result in cursor.fetchall():
                upserted.append(UpsertedFile(file_id=result["file_id"], path=result["path"]))
        return upserted

    @staticmethod
    def list_with_tags(conn: sqlite3.Connection) -> List[FileTagRow]:
        cursor = conn.cursor()
        cursor.execute(
            """
            SELECT f.file_id, f.filename, f.file_type, f.path,
                   f.created_at, f.updated_at, f.last_indexed_at,
                   t.name AS tag_name
            FROM files f
            LEFT JOIN tags t ON f.file_id = t.file_id
            ORDER BY f.created_at, f.rowid, t.rowid
            """
        )
        rows = cursor.fetchall()

        return [
            FileTagRow(
                file_id=row["file_id"],
                filename=row["filename"],
                file_type=row["file_type"],
                path=row["path"],
                created_at=datetime.fromisoformat(row["created_at"]),
                updated_at=datetime.fromisoformat(row["updated_at"]),
                last_indexed_at=datetime.fromisoformat(row["last_indexed_at"]),
                tag_name=row["tag_name"],
            )
            for row in rows
        ]
