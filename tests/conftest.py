"""Shared pytest fixtures for all tests."""

from datetime import datetime, timedelta, timezone

import pytest

from cli.config import Config
from catalog.repositories.memory_store import InMemoryRecordStore
from catalog.repositories.sqlite_store import SqliteRecordStore
from catalog.types import FileDescriptor


class FakeClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start=None):
        self.current = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture
def sqlite_store(tmp_path):
    """
    Create a SQLite record store in a temporary directory.
    """
    return SqliteRecordStore(str(tmp_path / "catalog.db"))


@pytest.fixture
def memory_store():
    return InMemoryRecordStore()


@pytest.fixture(params=["sqlite", "memory"])
def record_store(request, tmp_path):
    """
    Record store fixture run once per backend.
    """
    if request.param == "sqlite":
        return SqliteRecordStore(str(tmp_path / "catalog.db"))
    return InMemoryRecordStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_descriptor():
    """
    Factory for FileDescriptor with sensible defaults.
    """
    def _make(path="/files/test.txt", filename=None, file_type="text/plain", tags=None, last_indexed_at=None):
        return FileDescriptor(
            filename=filename or path.rsplit("/", 1)[-1],
            file_type=file_type,
            path=path,
            last_indexed_at=last_indexed_at,
            tags=tags,
        )
    return _make


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.
    """
    config_dir = tmp_path / '.file-catalog'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.
    """
    return Config(temp_config_dir / 'config.json')
