"""Utility functions for CLI operations."""

import json
from pathlib import Path
from typing import List


def load_descriptors(path: Path) -> List[dict]:
    """
    Read file descriptors from a JSON document.

    Accepts either a bare list of descriptors or an object with a ``files``
    list, the same shape the ingest endpoint takes.

    Raises:
        ValueError: If the document has neither shape
    """
    with open(path, 'r') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get('files')

    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of files or an object with a 'files' list")

    return data


def format_file_record(record: dict) -> str:
    """Render one listed file as an indented block."""
    tags = ', '.join(record.get('tags') or []) or '(none)'
    return (
        f"  - {record['path']} (ID: {record['id'][:8]}...)\n"
        f"    Name: {record['filename']}  Type: {record['fileType']}\n"
        f"    Tags: {tags}\n"
        f"    Indexed: {record['lastIndexedAt']}  Updated: {record['updatedAt']}"
    )
