"""File catalog API routes."""

from fastapi import APIRouter, Depends, status

from catalog.routes.dependencies import get_ingestion_service, get_listing_service
from catalog.schemas.common import ErrorResponse, ValidationErrorResponse
from catalog.schemas.files import (
    FileRecordResponse,
    IngestFilesRequest,
    IngestFilesResponse,
    IngestOutcomeResponse,
    IngestSummary,
    ListFilesResponse,
)
from catalog.services.ingestion_service import IngestionService
from catalog.services.listing_service import ListingService

router = APIRouter(prefix="/files", tags=["Files"])


@router.post(
    "/ingest",
    response_model=IngestFilesResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
def ingest_files(
    request: IngestFilesRequest,
    ingestion_service: IngestionService = Depends(get_ingestion_service)
):
    """
    Ingest a batch of file descriptors.

    Parameters:
        - files: List of {filename, fileType, path, lastIndexedAt?, tags?}

    Returns:
        - message: Completion message
        - summary: total / successful / failed counts
        - results: One outcome per submitted file, in request order

    Raises:
        - 400: Validation failed (structured error list)
        - 500: Batch rolled back after a storage failure
    """
    outcomes = ingestion_service.ingest([item.to_descriptor() for item in request.files])

    successful = sum(1 for outcome in outcomes if outcome.success)

    return IngestFilesResponse(
        message="File ingestion completed",
        summary=IngestSummary(
            total=len(outcomes),
            successful=successful,
            failed=len(outcomes) - successful,
        ),
        results=[IngestOutcomeResponse.from_outcome(outcome) for outcome in outcomes],
    )


@router.get(
    "",
    response_model=ListFilesResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse}},
)
def list_files(listing_service: ListingService = Depends(get_listing_service)):
    """
    List every cataloged file with its tags, oldest first.

    Returns:
        - files: File records with tags
        - count: Number of files

    Raises:
        - 503: Record store unavailable
    """
    records = listing_service.list_all()

    return ListFilesResponse(
        files=[FileRecordResponse.from_record(record) for record in records],
        count=len(records),
    )
