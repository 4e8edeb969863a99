"""Entry point for the catalog service."""

import time
import uuid
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from catalog.config import API_PREFIX, CATALOG_HOST, CATALOG_PORT
from catalog.exceptions import CatalogException, IngestionFailedError, StorageError
from catalog.repositories import RecordStore, create_record_store
from catalog.routes.file_routes import router as file_router
from catalog.schemas.common import ValidationErrorItem, ValidationErrorResponse

logger = setup_logging('catalog')


def _format_validation_errors(exc: RequestValidationError) -> list:
    items = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] == "body":
            location = location[1:]
        items.append(ValidationErrorItem(
            field=".".join(location) or "body",
            message=error.get("msg", "Invalid value"),
            code=error.get("type", "invalid"),
        ))
    return items


async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


async def validation_error_handler(request: Request, exc: RequestValidationError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    errors = _format_validation_errors(exc)
    logger.warning(
        f"Validation failed: {len(errors)} errors [request_id={request_id}] path={request.url.path}"
    )
    body = ValidationErrorResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        message="Validation failed",
        errors=errors,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(mode="json", by_alias=True)
    )


async def ingestion_failed_handler(request: Request, exc: IngestionFailedError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Ingestion failed: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "code": "INGESTION_FAILED"}
    )


async def storage_error_handler(request: Request, exc: StorageError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Record store unavailable: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc), "code": "STORE_UNAVAILABLE"}
    )


async def catalog_exception_handler(request: Request, exc: CatalogException):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Catalog exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "code": "INTERNAL_ERROR"}
    )


def create_app(record_store: Optional[RecordStore] = None) -> FastAPI:
    """
    Build the catalog application around a record store.

    Args:
        record_store: Store to serve from. Built from configuration when omitted

    Returns:
        Configured FastAPI application
    """
    if record_store is None:
        record_store = create_record_store()

    app = FastAPI(
        title="File Catalog",
        description="File metadata catalog with batch ingestion and tag replacement",
        version="1.0.0"
    )
    app.state.record_store = record_store

    app.middleware("http")(log_requests)

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IngestionFailedError, ingestion_failed_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(CatalogException, catalog_exception_handler)

    app.include_router(file_router, prefix=API_PREFIX)

    @app.on_event("startup")
    async def startup_event():
        logger.info(f"Catalog service starting up [store={record_store.backend_name}]")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Catalog service shutting down...")

    @app.get("/")
    async def root():
        """
        Root endpoint for health check.
        """
        return {"message": "File Catalog API", "status": "running"}

    @app.get("/health")
    async def health_check():
        """
        Liveness probe. Returns 200 while the process is serving.
        """
        return {"status": "healthy", "service": "catalog"}

    @app.get("/ready")
    def ready_check(request: Request):
        """
        Readiness check endpoint.
        Verifies the record store answers.
        """
        try:
            request.app.state.record_store.ping()
            store_status = "ok"
        except StorageError as e:
            store_status = f"error: {e}"

        ready = store_status == "ok"
        status_code = status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE

        return JSONResponse(
            status_code=status_code,
            content={"ready": ready, "store": store_status}
        )

    return app


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "catalog.main:create_app",
        factory=True,
        host=CATALOG_HOST,
        port=CATALOG_PORT,
    )


if __name__ == "__main__":
    main()
