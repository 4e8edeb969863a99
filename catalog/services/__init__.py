"""Service layer for business logic."""

from catalog.services.ingestion_service import IngestionService
from catalog.services.listing_service import ListingService

__all__ = [
    "IngestionService",
    "ListingService",
]
