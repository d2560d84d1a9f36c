"""
Flipbook Backend — Custom Exception Hierarchy
===============================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching HTTP status.
Who:   Raised by services and routes; caught by global handlers.

Exception Hierarchy:
    FlipbookError (base)          → 500 Internal Server Error
    ├── ValidationError           → 400 Bad Request (client can fix)
    ├── NotFoundError             → 404 Not Found
    └── StorageError              → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class FlipbookError(Exception):
    """
    Base exception for all Flipbook application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(FlipbookError):
    """
    Raised when client input fails validation.

    When:    Missing `url`, non-numeric `pageIndex`, malformed JSON body.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "url and pageIndex are required",
            "details": {"field": "pageIndex"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(FlipbookError):
    """
    Raised when a key lookup matched no document.

    When:    DELETE /api/images for an unused pageIndex, any /api/projects/{shareId}
             call with an unknown shareId.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageError(FlipbookError):
    """
    Raised when a document-store call fails.

    HTTP:    500 Internal Server Error

    The message is a short per-operation description ("Failed to fetch images").
    Driver details go into `context` for the server log. `reason` is the one
    exception: when set, it is returned to the client under `details.reason`.
    Only project creation sets it.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.reason = reason
