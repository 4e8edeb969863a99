"""Abstract record store interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import List, Sequence

from catalog.types import FileRow, FileTagRow, TagRow, UpsertedFile


class StoreTransaction(ABC):
    """
    Unit of work handed out by ``RecordStore.transaction()``.

    Everything done through one instance commits together or not at all.
    """

    @abstractmethod
    def upsert_files(self, rows: Sequence[FileRow]) -> List[UpsertedFile]:
        """
        Insert or update files keyed on ``path``.

        Existing rows get ``filename``, ``file_type``, ``updated_at`` and
        ``last_indexed_at`` overwritten; ``created_at`` and ``file_id`` are
        kept. Returns the resolved id and path of every affected row.
        """
        ...

    @abstractmethod
    def delete_tags_for_files(self, file_ids: Sequence[str]) -> int:
        """Delete every tag owned by the given files. Returns rows removed."""
        ...

    @abstractmethod
    def insert_tags(self, tags: Sequence[TagRow]) -> None:
        """Insert tag rows, one per entry, without deduplication."""
        ...


class RecordStore(ABC):
    """All record store backends implement this interface."""

    backend_name: str = ""

    @abstractmethod
    def transaction(self) -> AbstractContextManager[StoreTransaction]:
        """
        Open an all-or-nothing scope.

        Commits when the block exits normally, rolls back and re-raises when
        it exits with an exception.
        """
        ...

    @abstractmethod
    def list_files_with_tags(self) -> List[FileTagRow]:
        """
        Return committed files left-joined with their tags, ordered by
        ``created_at`` ascending.
        """
        ...

    @abstractmethod
    def ping(self) -> None:
        """Raise ``StorageError`` if the store cannot be reached."""
        ...
