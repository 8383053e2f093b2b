"""
Shared error handling for the card records service.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel

from shared.logging import request_id_var


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class CardsServiceException(Exception):
    """Base exception for card records service errors."""

    status_code = 500

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id_var.get(),
            code=self.code,
            message=self.message,
            details=self.details
        )


class ValidationError(CardsServiceException):
    """Missing or malformed request parameters."""

    status_code = 400

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class ParseError(CardsServiceException):
    """Request body could not be parsed."""

    status_code = 400

    def __init__(self, message: str = "Malformed request body", details: Optional[Dict[str, Any]] = None):
        super().__init__("PARSE_ERROR", message, details)


class UpstreamError(CardsServiceException):
    """Upstream data source returned a non-success response or was unreachable."""

    status_code = 502

    def __init__(
        self,
        service: str,
        message: str = "Upstream request failed",
        details: Optional[Dict[str, Any]] = None,
        upstream_status: Optional[int] = None,
    ):
        self.service = service
        self.upstream_status = upstream_status
        super().__init__("UPSTREAM_ERROR", f"{service}: {message}", details)
