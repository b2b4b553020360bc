"""
Shared error handling for the Locations service layer.
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


class LocationsServiceException(Exception):
    """Base exception for Locations services."""

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


class InvalidSectionError(LocationsServiceException):
    """A requested details section is not in the whitelist."""

    status_code = 400

    def __init__(self, section: str, details: Optional[Dict[str, Any]] = None):
        self.section = section
        super().__init__("INVALID_SECTION", f"Invalid value {section} for sections.", details)


class StoreUnavailableError(LocationsServiceException):
    """Key-value store unreachable or erroring."""

    status_code = 503

    def __init__(self, message: str = "Store unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__("STORE_UNAVAILABLE", message, details)


class CoordinatesUnavailableError(LocationsServiceException):
    """Location record missing or carrying a malformed coordinate field."""

    status_code = 500

    def __init__(self, location_id: int, message: str = "Coordinates unavailable", details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        details.setdefault("location_id", location_id)
        super().__init__("COORDINATES_UNAVAILABLE", message, details)


class ProviderUnavailableError(LocationsServiceException):
    """Weather provider could not be reached."""

    status_code = 502

    def __init__(self, provider: str, message: str = "Provider unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__("PROVIDER_UNAVAILABLE", f"{provider}: {message}", details)


class ProviderError(LocationsServiceException):
    """Weather provider answered with an error status or an unusable body."""

    status_code = 502

    def __init__(self, provider: str, message: str = "Provider error", details: Optional[Dict[str, Any]] = None):
        super().__init__("PROVIDER_ERROR", f"{provider}: {message}", details)
