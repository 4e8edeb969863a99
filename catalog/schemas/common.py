"""Common schemas used across multiple endpoints."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """Response model for errors."""
    detail: str
    code: str


class ValidationErrorItem(BaseModel):
    """One violated constraint in a request body."""
    field: str
    message: str
    code: str


class ValidationErrorResponse(CamelModel):
    """Response model for rejected request bodies."""
    status_code: int
    message: str
    errors: List[ValidationErrorItem]
    timestamp: datetime
