"""
Shared error handling for the MusicKit token service.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class MusicKitException(Exception):
    """Base exception for the MusicKit token service."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self, request_id: Optional[str] = None) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class ConfigMissingError(MusicKitException):
    """A required configuration field is absent."""

    def __init__(self, field: str, details: Optional[Dict[str, Any]] = None):
        self.field = field
        super().__init__("CONFIG_MISSING", f"Configuration missing: {field}", {"field": field, **(details or {})})


class SigningError(MusicKitException):
    """Base class for failures while producing a signed token."""

    def __init__(self, code: str = "SIGNING_ERROR", message: str = "Token signing failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(code, message, details)


class KeyUnreadableError(SigningError):
    """Private key file could not be read."""

    def __init__(self, detail: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("KEY_UNREADABLE", f"Failed to read private key: {detail}", details)


class InvalidKeyError(SigningError):
    """Private key material is not a usable P-256 key."""

    def __init__(self, detail: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_KEY", f"Invalid private key format: {detail}", details)


class EncodingFailedError(SigningError):
    """JWT encoding failed."""

    def __init__(self, detail: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("ENCODING_FAILED", f"JWT encoding failed: {detail}", details)
