"""In-process record store for tests and throwaway deployments."""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, Generator, List, Optional, Sequence, Tuple

from common.logging_config import get_logger
from catalog.exceptions import StorageError
from catalog.repositories.base import RecordStore, StoreTransaction
from catalog.types import FileRow, FileTagRow, TagRow, UpsertedFile
from catalog.utils import generate_uuid

logger = get_logger(__name__)


@dataclass(frozen=True)
class _StoredFile:
    file_id: str
    filename: str
    file_type: str
    path: str
    created_at: datetime
    updated_at: datetime
    last_indexed_at: datetime
    seq: int
    deleted_at: Optional[datetime] = None


@dataclass(frozen=True)
class _StoredTag:
    tag_id: str
    file_id: str
    name: str


# (files by id, tags in insertion order, next insertion sequence)
_State = Tuple[Dict[str, _StoredFile], List[_StoredTag], int]


class InMemoryTransaction(StoreTransaction):
    """Works on private copies that the store swaps in on commit."""

    def __init__(self, state: _State):
        files, tags, next_seq = state
        self.files = dict(files)
        self.tags = list(tags)
        self.next_seq = next_seq
        self._id_by_path = {f.path: f.file_id for f in self.files.values()}

    def upsert_files(self, rows: Sequence[FileRow]) -> List[UpsertedFile]:
        upserted = []
        for row in rows:
            file_id = self._id_by_path.get(row.path)
            if file_id is None:
                file_id = generate_uuid()
                self.files[file_id] = _StoredFile(
                    file_id=file_id,
                    filename=row.filename,
                    file_type=row.file_type,
                    path=row.path,
                    created_at=row.created_at,
                    updated_at=row.updated_at,
                    last_indexed_at=row.last_indexed_at,
                    seq=self.next_seq,
                )
                self.next_seq += 1
                self._id_by_path[row.path] = file_id
            else:
                self.files[file_id] = replace(
                    self.files[file_id],
                    filename=row.filename,
                    file_type=row.file_type,
                    updated_at=row.updated_at,
                    last_indexed_at=row.last_indexed_at,
                )
            upserted.append(UpsertedFile(file_id=file_id, path=row.path))
        return upserted

    def delete_tags_for_files(self, file_ids: Sequence[str]) -> int:
        doomed = set(file_ids)
        before = len(self.tags)
        self.tags = [tag for tag in self.tags if tag.file_id not in doomed]
        return before - len(self.tags)

    def insert_tags(self, tags: Sequence[TagRow]) -> None:
        for tag in tags:
            if tag.file_id not in self.files:
                raise StorageError(f"Tag references unknown file {tag.file_id}")
            self.tags.append(_StoredTag(tag_id=generate_uuid(), file_id=tag.file_id, name=tag.name))


class InMemoryRecordStore(RecordStore):
    backend_name = "memory"

    def __init__(self):
        self._state: _State = ({}, [], 0)
        self._write_lock = threading.Lock()

    @contextmanager
    def transaction(self) -> Generator[InMemoryTransaction, None, None]:
        with self._write_lock:
            tx = InMemoryTransaction(self._state)
            yield tx
            # Single reference swap, so readers see either the old or the new state.
            self._state = (tx.files, tx.tags, tx.next_seq)
            logger.debug(f"In-memory transaction committed [files={len(tx.files)}] [tags={len(tx.tags)}]")

    def list_files_with_tags(self) -> List[FileTagRow]:
        files, tags, _ = self._state

        tags_by_file: Dict[str, List[str]] = {}
        for tag in tags:
            tags_by_file.setdefault(tag.file_id, []).append(tag.name)

        rows = []
        for stored in sorted(files.values(), key=lambda f: (f.created_at, f.seq)):
            names = tags_by_file.get(stored.file_id) or [None]
            for name in names:
                rows.append(FileTagRow(
                    file_id=stored.file_id,
                    filename=stored.filename,
                    file_type=stored.file_type,
                    path=stored.path,
                    created_at=stored.created_at,
                    updated_at=stored.updated_at,
                    last_indexed_at=stored.last_indexed_at,
                    tag_name=name,
                ))
        return rows

    def ping(self) -> None:
        return None
