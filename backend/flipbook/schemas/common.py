"""
Flipbook Backend — Shared API Schemas
=======================================

What:  Pieces every resource schema builds on, plus the error, message and
       health response formats.

Wire format:
    Field names are camelCase on the wire (pageIndex, uploadedAt, shareId).
    The MongoDB `_id` is returned as a string under `_id`, the shape the flipbook
    frontend reads.
"""

from typing import Annotated, Optional

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _object_id_to_str(value):
    if isinstance(value, ObjectId):
        return str(value)
    return value


ObjectIdStr = Annotated[str, BeforeValidator(_object_id_to_str)]


class CamelModel(BaseModel):
    """Request/response base: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoredDocument(CamelModel):
    """A document read back from MongoDB."""

    id: ObjectIdStr = Field(alias="_id", description="MongoDB document id")


# ══════════════════════════════════════════════════════════════════════════
# Generic Responses
# ══════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    message: str = Field(description="Human-readable confirmation")


class DeletedCountResponse(CamelModel):
    """Returned by the delete endpoints that report how much was removed."""

    message: str = Field(description="Human-readable confirmation")
    deleted_count: int = Field(description="Number of documents removed")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Fields:
        error: Machine-readable code (validation_error, not_found, server_error)
        message: Human-readable description
        details: Optional extra context (offending fields, storage reason)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "not_found",
            "message": "Project not found",
            "request_id": "3f9c2a1b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Always 'ok' while the process is serving")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
