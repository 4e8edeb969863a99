"""Configuration settings for the catalog server."""

import os


STORE_BACKEND = os.environ.get("CATALOG_STORE_BACKEND", "sqlite")

DATABASE_PATH = os.environ.get("CATALOG_DATABASE_PATH", "./data/catalog.db")

DATABASE_TIMEOUT = float(os.environ.get("CATALOG_DATABASE_TIMEOUT", "5.0"))

CATALOG_HOST = os.environ.get("CATALOG_HOST", "0.0.0.0")

CATALOG_PORT = int(os.environ.get("CATALOG_PORT", "8000"))

API_PREFIX = "/api"
