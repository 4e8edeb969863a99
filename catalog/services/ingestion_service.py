"""Ingestion service: batch upsert of files and their tags."""

from datetime import datetime
from typing import Callable, Dict, List, Sequence

from common.logging_config import get_logger
from catalog.exceptions import IngestionFailedError, StorageError
from catalog.repositories.base import RecordStore
from catalog.types import FileDescriptor, FileRow, IngestOutcome, TagRow
from catalog.utils import as_utc, utc_now

logger = get_logger(__name__)

ACTION_UPSERTED = "upserted"
UNRESOLVED_PATH_ERROR = "Failed to upsert file"


class IngestionService:
    def __init__(self, record_store: RecordStore, clock: Callable[[], datetime] = utc_now):
        self.record_store = record_store
        self.clock = clock

    def ingest(self, batch: Sequence[FileDescriptor]) -> List[IngestOutcome]:
        """
        Upsert a batch of files keyed on path and replace their tags.

        The whole batch runs in one store transaction. Every file touched by
        the batch loses its previous tags; a descriptor without tags leaves
        its file untagged.

        Args:
            batch: Descriptors in caller order

        Returns:
            One outcome per descriptor, in the same order

        Raises:
            IngestionFailedError: If the store failed and the batch was rolled back
        """
        if not batch:
            return []

        logger.info(f"Ingesting batch of {len(batch)} files")
        now = as_utc(self.clock())

        rows = [
            FileRow(
                filename=descriptor.filename,
                file_type=descriptor.file_type,
                path=descriptor.path,
                created_at=now,
                updated_at=now,
                last_indexed_at=as_utc(descriptor.last_indexed_at) or now,
            )
            for descriptor in batch
        ]

        try:
            with self.record_store.transaction() as tx:
                upserted = tx.upsert_files(rows)
                path_to_file_id: Dict[str, str] = {f.path: f.file_id for f in upserted}

                file_ids = list(dict.fromkeys(path_to_file_id.values()))
                removed = tx.delete_tags_for_files(file_ids)
                logger.debug(f"Cleared {removed} existing tags from {len(file_ids)} files")

                tag_rows = self._build_tag_rows(batch, path_to_file_id)
                tx.insert_tags(tag_rows)
                logger.debug(f"Inserted {len(tag_rows)} tags")
        except StorageError as e:
            logger.error(f"Ingestion batch rolled back ({len(batch)} files): {e}", exc_info=True)
            raise IngestionFailedError(f"Batch ingestion failed: {e}") from e

        outcomes = [self._outcome_for(descriptor, path_to_file_id) for descriptor in batch]

        failed = sum(1 for outcome in outcomes if not outcome.success)
        if failed:
            logger.warning(f"{failed} of {len(batch)} files could not be resolved after upsert")
        logger.info(f"Ingestion completed: {len(batch) - failed} upserted, {failed} failed")

        return outcomes

    @staticmethod
    def _build_tag_rows(batch: Sequence[FileDescriptor], path_to_file_id: Dict[str, str]) -> List[TagRow]:
        # Later descriptors for the same path replace earlier ones, matching
        # the row content the upsert kept.
        tags_by_path: Dict[str, List[str]] = {}
        for descriptor in batch:
            tags_by_path[descriptor.path] = list(descriptor.tags or [])

        tag_rows = []
        for path, tags in tags_by_path.items():
            file_id = path_to_file_id.get(path)
            if file_id is None:
                continue
            tag_rows.extend(TagRow(file_id=file_id, name=tag) for tag in tags)
        return tag_rows

    @staticmethod
    def _outcome_for(descriptor: FileDescriptor, path_to_file_id: Dict[str, str]) -> IngestOutcome:
        file_id = path_to_file_id.get(descriptor.path)
        if file_id is None:
            return IngestOutcome(success=False, path=descriptor.path, error=UNRESOLVED_PATH_ERROR)
        return IngestOutcome(success=True, path=descriptor.path, file_id=file_id, action=ACTION_UPSERTED)
