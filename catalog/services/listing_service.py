"""Listing service for reading the whole catalog."""

from typing import Dict, List

from common.logging_config import get_logger
from catalog.repositories.base import RecordStore
from catalog.types import FileRecord

logger = get_logger(__name__)


class ListingService:
    def __init__(self, record_store: RecordStore):
        self.record_store = record_store

    def list_all(self) -> List[FileRecord]:
        rows = self.record_store.list_files_with_tags()

        records: Dict[str, FileRecord] = {}
        for row in rows:
            record = records.get(row.file_id)
            if record is None:
                record = FileRecord(
                    file_id=row.file_id,
                    filename=row.filename,
                    file_type=row.file_type,
                    path=row.path,
                    created_at=row.created_at,
                    updated_at=row.updated_at,
                    last_indexed_at=row.last_indexed_at,
                )
                records[row.file_id] = record
            if row.tag_name is not None:
                record.tags.append(row.tag_name)

        logger.info(f"Listed {len(records)} files")
        return list(records.values())
