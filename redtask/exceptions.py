"""
Structured exceptions and error responses for redtask.

Provides consistent error handling across the CLI and the API with:
- Custom exception classes
- Structured error response format
- FastAPI exception handlers
"""

from typing import Any, Dict, Optional, List
from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel


# =============================================================================
# Error Response Schema
# =============================================================================

class ErrorDetail(BaseModel):
    """Detail of a single error."""
    loc: Optional[List[str]] = None
    msg: str
    type: str


class ErrorResponse(BaseModel):
    """Structured error response format."""
    error: str  # Error code (e.g., "not_found", "duplicate_shortcode")
    message: str  # Human-readable message
    details: Optional[List[ErrorDetail]] = None


# =============================================================================
# Custom Exceptions
# =============================================================================

class RedtaskException(Exception):
    """Base exception for all redtask errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "internal_error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class StoreUnavailable(RedtaskException):
    """The key-value store could not be reached."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Store unavailable: {reason}",
            error_code="store_unavailable",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
        self.reason = reason


class NotFound(RedtaskException):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"{resource} with ID {resource_id} not found",
            error_code="not_found",
            status_code=status.HTTP_404_NOT_FOUND,
        )
        self.resource = resource
        self.resource_id = resource_id


class DecodeError(RedtaskException):
    """Stored payload could not be decoded into the expected record."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            message=f"Could not decode value at {key}: {reason}",
            error_code="decode_error",
            details=[{"loc": [key], "msg": reason, "type": "decode_error"}],
        )
        self.key = key
        self.reason = reason


class EncodeError(RedtaskException):
    """Record could not be serialized."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Could not encode record: {reason}",
            error_code="encode_error",
        )
        self.reason = reason


class DuplicateShortcode(RedtaskException):
    """Another live project already uses this shortcode."""

    def __init__(self, shortcode: str):
        super().__init__(
            message=f"A project with shortcode '{shortcode}' already exists",
            error_code="duplicate_shortcode",
            status_code=status.HTTP_409_CONFLICT,
            details=[{
                "loc": ["body", "shortcode"],
                "msg": f"Shortcode '{shortcode}' is taken",
                "type": "duplicate_error",
            }],
        )
        self.shortcode = shortcode


# =============================================================================
# Exception Handlers
# =============================================================================

async def redtask_exception_handler(request: Request, exc: RedtaskException) -> JSONResponse:
    """Handle RedtaskException and return structured response."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.error_code,
            "message": exc.message,
            "details": exc.details,
        },
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(RedtaskException, redtask_exception_handler)
