"""Tests for catalog API endpoints."""

import pytest
from fastapi.testclient import TestClient

from catalog.exceptions import StorageError
from catalog.main import create_app
from catalog.repositories.memory_store import InMemoryTransaction
from catalog.repositories.sqlite_store import SqliteRecordStore


@pytest.fixture
def client(record_store):
    """Create FastAPI test client for each store backend."""
    return TestClient(create_app(record_store))


def _file(path, **overrides):
    body = {"filename": path.rsplit("/", 1)[-1], "fileType": "text/plain", "path": path}
    body.update(overrides)
    return body


def test_root_endpoint(client):
    response = client.get('/')
    assert response.status_code == 200
    assert response.json()['status'] == 'running'


def test_health_endpoint(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.json() == {'status': 'healthy', 'service': 'catalog'}


def test_ready_endpoint(client):
    response = client.get('/ready')
    assert response.status_code == 200
    assert response.json() == {'ready': True, 'store': 'ok'}


def test_ready_endpoint_store_down(memory_store, monkeypatch):
    def broken_ping():
        raise StorageError("unreachable")

    monkeypatch.setattr(memory_store, "ping", broken_ping)
    client = TestClient(create_app(memory_store))

    response = client.get('/ready')

    assert response.status_code == 503
    assert response.json()['ready'] is False


def test_request_id_header(client):
    response = client.get('/health', headers={'X-Request-ID': 'req-123'})
    assert response.headers['X-Request-ID'] == 'req-123'
    assert client.get('/health').headers['X-Request-ID']


def test_end_to_end_ingest_then_list(client):
    response = client.post('/api/files/ingest', json={'files': [
        {'path': '/d.pdf', 'filename': 'd.pdf', 'fileType': 'application/pdf', 'tags': ['doc', 'pdf']}
    ]})

    assert response.status_code == 200
    data = response.json()
    assert data['message'] == 'File ingestion completed'
    assert data['summary'] == {'total': 1, 'successful': 1, 'failed': 0}
    result = data['results'][0]
    assert result['success'] is True
    assert result['path'] == '/d.pdf'
    assert result['action'] == 'upserted'
    assert result['fileId']
    assert 'error' not in result

    listing = client.get('/api/files')

    assert listing.status_code == 200
    body = listing.json()
    assert body['count'] == 1
    record = body['files'][0]
    assert record['id'] == result['fileId']
    assert record['path'] == '/d.pdf'
    assert record['fileType'] == 'application/pdf'
    assert set(record['tags']) == {'doc', 'pdf'}
    for key in ('createdAt', 'updatedAt', 'lastIndexedAt'):
        assert key in record


def test_ingest_empty_list(client):
    response = client.post('/api/files/ingest', json={'files': []})

    assert response.status_code == 200
    assert response.json()['summary'] == {'total': 0, 'successful': 0, 'failed': 0}
    assert response.json()['results'] == []


def test_ingest_with_last_indexed_at(client):
    client.post('/api/files/ingest', json={'files': [
        _file('/stamped.txt', lastIndexedAt='2023-01-15T10:30:00.000Z')
    ]})

    record = client.get('/api/files').json()['files'][0]

    assert record['lastIndexedAt'].startswith('2023-01-15T10:30:00')


def test_list_files_empty(client):
    response = client.get('/api/files')
    assert response.status_code == 200
    assert response.json() == {'files': [], 'count': 0}


def test_reingest_replaces_tags(client):
    client.post('/api/files/ingest', json={'files': [_file('/a', tags=['x'])]})
    client.post('/api/files/ingest', json={'files': [_file('/a', tags=['y'])]})

    files = client.get('/api/files').json()['files']

    assert len(files) == 1
    assert files[0]['tags'] == ['y']


def test_unknown_fields_are_ignored(client):
    response = client.post('/api/files/ingest', json={'files': [_file('/extra', size=123)]})
    assert response.status_code == 200


class TestValidation:
    def test_empty_path_rejected(self, client):
        response = client.post('/api/files/ingest', json={'files': [_file('/ok'), _file('')]})

        assert response.status_code == 400
        data = response.json()
        assert data['statusCode'] == 400
        assert data['message'] == 'Validation failed'
        assert 'timestamp' in data
        fields = {error['field'] for error in data['errors']}
        assert 'files.1.path' in fields
        assert 'files.1.filename' in fields

    def test_missing_required_fields(self, client):
        response = client.post('/api/files/ingest', json={'files': [{'path': '/only-path'}]})

        assert response.status_code == 400
        errors = response.json()['errors']
        assert {e['field'] for e in errors} == {'files.0.filename', 'files.0.fileType'}
        assert all(e['code'] == 'missing' for e in errors)
        assert all(e['message'] for e in errors)

    def test_missing_files_key(self, client):
        response = client.post('/api/files/ingest', json={})

        assert response.status_code == 400
        assert response.json()['errors'][0]['field'] == 'files'

    def test_invalid_timestamp(self, client):
        response = client.post('/api/files/ingest', json={'files': [_file('/t', lastIndexedAt='yesterday')]})

        assert response.status_code == 400
        assert response.json()['errors'][0]['field'] == 'files.0.lastIndexedAt'

    @pytest.mark.parametrize('value', [1700000000, '2024-01-01', '2024-01-01T25:00:00Z'])
    def test_last_indexed_at_must_be_iso_datetime(self, client, value):
        response = client.post('/api/files/ingest', json={'files': [_file('/t', lastIndexedAt=value)]})

        assert response.status_code == 400
        assert response.json()['errors'][0]['field'] == 'files.0.lastIndexedAt'
        assert client.get('/api/files').json()['count'] == 0

    def test_last_indexed_at_keeps_offset_instant(self, client):
        response = client.post('/api/files/ingest', json={'files': [
            _file('/offset', lastIndexedAt='2024-01-01T10:00:00+05:00')
        ]})

        assert response.status_code == 200
        record = client.get('/api/files').json()['files'][0]
        assert record['lastIndexedAt'].startswith('2024-01-01T05:00:00')

    def test_tags_must_be_strings(self, client):
        response = client.post('/api/files/ingest', json={'files': [_file('/t', tags=[{'name': 'x'}])]})

        assert response.status_code == 400
        assert response.json()['errors'][0]['field'] == 'files.0.tags.0'

    def test_rejected_batch_writes_nothing(self, client):
        client.post('/api/files/ingest', json={'files': [_file('/good'), _file('/bad', fileType='')]})

        assert client.get('/api/files').json()['count'] == 0


class TestStorageFailures:
    def test_ingest_failure_returns_500_and_rolls_back(self, memory_store, monkeypatch):
        client = TestClient(create_app(memory_store))

        def failing_insert(self, tags):
            raise StorageError("simulated fault")

        monkeypatch.setattr(InMemoryTransaction, "insert_tags", failing_insert)

        response = client.post('/api/files/ingest', json={'files': [_file('/f', tags=['t'])]})

        assert response.status_code == 500
        assert response.json()['code'] == 'INGESTION_FAILED'
        assert client.get('/api/files').json()['count'] == 0

    def test_listing_failure_returns_503(self, tmp_path, monkeypatch):
        store = SqliteRecordStore(str(tmp_path / "catalog.db"))

        def broken_listing():
            raise StorageError("database is locked")

        monkeypatch.setattr(store, "list_files_with_tags", broken_listing)
        client = TestClient(create_app(store))

        response = client.get('/api/files')

        assert response.status_code == 503
        assert response.json() == {'detail': 'database is locked', 'code': 'STORE_UNAVAILABLE'}
