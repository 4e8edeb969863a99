"""CLI constants."""

GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"

DEFAULT_CONFIG_PATH = "~/.file-catalog/config.json"

INGEST_ENDPOINT = "/api/files/ingest"
FILES_ENDPOINT = "/api/files"
