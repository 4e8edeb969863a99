"""Tests for the CLI entry point and descriptor loading."""

import json

import pytest

from cli import main as cli_main
from cli.utils import format_file_record, load_descriptors


class StubClient:
    instances = []

    def __init__(self, config):
        self.config = config
        self.ingested = None
        self.closed = False
        StubClient.instances.append(self)

    def ingest_files(self, descriptors):
        self.ingested = descriptors
        return f"Ingested {len(descriptors)}/{len(descriptors)} file(s)"

    def list_files(self):
        return "No files in catalog"

    def close(self):
        self.closed = True


@pytest.fixture
def stub_client(monkeypatch):
    StubClient.instances = []
    monkeypatch.setattr(cli_main, "CatalogClient", StubClient)
    return StubClient


def test_load_descriptors_accepts_list(tmp_path):
    path = tmp_path / "batch.json"
    path.write_text(json.dumps([{'path': '/a'}]))

    assert load_descriptors(path) == [{'path': '/a'}]


def test_load_descriptors_accepts_files_object(tmp_path):
    path = tmp_path / "batch.json"
    path.write_text(json.dumps({'files': [{'path': '/a'}, {'path': '/b'}]}))

    assert [d['path'] for d in load_descriptors(path)] == ['/a', '/b']


def test_load_descriptors_rejects_other_shapes(tmp_path):
    path = tmp_path / "batch.json"
    path.write_text(json.dumps({'items': []}))

    with pytest.raises(ValueError):
        load_descriptors(path)


def test_format_file_record_without_tags():
    text = format_file_record({
        'id': 'abcdef123456', 'filename': 'a.txt', 'fileType': 'text/plain', 'path': '/a.txt',
        'lastIndexedAt': '2024-01-01T00:00:00Z', 'updatedAt': '2024-01-01T00:00:00Z', 'tags': [],
    })

    assert '/a.txt (ID: abcdef12...)' in text
    assert 'Tags: (none)' in text


def test_run_ingest(tmp_path, stub_client, capsys):
    batch = tmp_path / "batch.json"
    batch.write_text(json.dumps([{'path': '/a', 'filename': 'a', 'fileType': 'text/plain'}]))

    code = cli_main.run(['--config', str(tmp_path / 'config.json'), '--port', '9001', 'ingest', str(batch)])

    assert code == 0
    client = stub_client.instances[0]
    assert client.ingested[0]['path'] == '/a'
    assert client.closed is True
    assert client.config.get_base_url().endswith(':9001')
    assert 'Ingested 1/1' in capsys.readouterr().out


def test_run_ingest_missing_file(tmp_path, stub_client, capsys):
    code = cli_main.run(['--config', str(tmp_path / 'config.json'), 'ingest', str(tmp_path / 'nope.json')])

    assert code == 1
    assert capsys.readouterr().out.startswith('Error:')


def test_run_list(tmp_path, stub_client, capsys):
    code = cli_main.run(['--config', str(tmp_path / 'config.json'), 'list'])

    assert code == 0
    assert 'No files in catalog' in capsys.readouterr().out


def test_command_is_required(tmp_path):
    with pytest.raises(SystemExit):
        cli_main.run(['--config', str(tmp_path / 'config.json')])


def test_run_config_saves_server(tmp_path, stub_client, capsys):
    config_path = tmp_path / 'config.json'

    code = cli_main.run(['--config', str(config_path), '--host', 'catalog.internal', '--port', '9100', 'config'])

    assert code == 0
    assert stub_client.instances == []
    assert 'http://catalog.internal:9100' in capsys.readouterr().out
    with open(config_path) as f:
        saved = json.load(f)
    assert saved['server_host'] == 'catalog.internal'
    assert saved['server_port'] == 9100
