"""CLI entry point."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from common.logging_config import setup_logging
from cli.catalog_client import CatalogClient
from cli.config import Config
from cli.constants import DEFAULT_CONFIG_PATH
from cli.utils import load_descriptors


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="file-catalog", description="File catalog command-line client")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to CLI config file")
    parser.add_argument("--host", help="Catalog server host (overrides config)")
    parser.add_argument("--port", type=int, help="Catalog server port (overrides config)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    ingest = subparsers.add_parser("ingest", help="Ingest file descriptors from a JSON file")
    ingest.add_argument("file", type=Path, help="JSON list of descriptors, or {\"files\": [...]}")

    subparsers.add_parser("list", help="List every file in the catalog")
    subparsers.add_parser("config", help="Save --host/--port as the default server")

    return parser


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logger = setup_logging('cli', log_level='DEBUG' if args.debug else None)
    if args.debug:
        logger.info("Debug logging enabled")

    config = Config(Path(args.config).expanduser())
    config.set_server(args.host, args.port)

    if args.command == "config":
        try:
            config.save()
        except OSError as e:
            print(f"Error: Cannot save config: {e}")
            return 1
        print(f"Default server set to {config.get_base_url()}")
        return 0

    client = CatalogClient(config)
    try:
        if args.command == "ingest":
            try:
                descriptors = load_descriptors(args.file)
            except (OSError, ValueError) as e:
                print(f"Error: {e}")
                return 1
            result = client.ingest_files(descriptors)
        else:
            result = client.list_files()
    finally:
        client.close()

    print(result)
    return 1 if result.startswith("Error:") else 0


def main() -> None:
    """Entry point for CLI."""
    sys.exit(run())


if __name__ == "__main__":
    main()
