"""Configuration management for the catalog CLI."""

import json
import os
from pathlib import Path
from typing import Optional

from common.logging_config import get_logger

logger = get_logger(__name__)


class Config:
    """Manages CLI configuration stored in JSON file."""

    DEFAULT_CONFIG = {
        "server_host": os.environ.get("CATALOG_SERVER_HOST", "localhost"),
        "server_port": int(os.environ.get("CATALOG_SERVER_PORT", "8000")),
        "timeout": 30,
        "max_retries": 3,
        "retry_backoff_multiplier": 2,
    }

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.file-catalog/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        A corrupt file is backed up to ``config.json.bak`` and defaults are used.
        """
        config = self.DEFAULT_CONFIG.copy()

        if not self.config_path.exists():
            try:
                self.config_path.parent.mkdir(parents=True, exist_ok=True)
                with open(self.config_path, 'w') as f:
                    json.dump(config, f, indent=2)
            except OSError as e:
                logger.warning(f"Cannot write default config to {self.config_path}: {e}")
            return config

        try:
            with open(self.config_path, 'r') as f:
                config.update(json.load(f))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable config {self.config_path}: {e}")
            backup_path = self.config_path.with_suffix('.json.bak')
            try:
                self.config_path.replace(backup_path)
            except OSError:
                logger.warning(f"Cannot back up config to {backup_path}")
            return self.DEFAULT_CONFIG.copy()

        return config

    def save(self) -> None:
        """Save current configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w') as f:
            json.dump(self.data, f, indent=2)

    def set_server(self, host: Optional[str] = None, port: Optional[int] = None) -> None:
        """
        Override the server address for this session without saving.
        """
        if host:
            self.data['server_host'] = host
        if port:
            self.data['server_port'] = port

    def get_base_url(self) -> str:
        """
        Get catalog server base URL.

        Returns:
            Base URL string (e.g., "http://localhost:8000")
        """
        host = self.data.get('server_host', 'localhost')
        port = self.data.get('server_port', 8000)
        return f"http://{host}:{port}"

    def get_timeout(self) -> int:
        return self.data.get('timeout', 30)

    def get_retry_config(self) -> dict:
        """
        Get retry configuration.

        Returns:
            Dictionary with 'max_retries' and 'retry_backoff_multiplier'
        """
        return {
            'max_retries': self.data.get('max_retries', 3),
            'retry_backoff_multiplier': self.data.get('retry_backoff_multiplier', 2),
        }
