"""FastAPI dependencies wiring services to the app's record store."""

from fastapi import Depends, Request

from catalog.repositories.base import RecordStore
from catalog.services.ingestion_service import IngestionService
from catalog.services.listing_service import ListingService


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_ingestion_service(record_store: RecordStore = Depends(get_record_store)) -> IngestionService:
    return IngestionService(record_store)


def get_listing_service(record_store: RecordStore = Depends(get_record_store)) -> ListingService:
    return ListingService(record_store)
