"""
Error types raised by the short link core.

Validation errors are raised inside the core and turned into structured
per-request outcomes by the service layer (see LinkService.create_links).
"""

from enum import Enum


class ValidationErrorKind(str, Enum):
    """Why a creation request was rejected"""
    INVALID_URL = "invalid_url"
    INVALID_CUSTOM_CODE = "invalid_custom_code"
    INVALID_VALIDITY_WINDOW = "invalid_validity_window"
    CODE_COLLISION = "code_collision"
    INVALID_BATCH = "invalid_batch"


class ShortLinkError(Exception):
    """Base class for all short link errors"""


class ValidationError(ShortLinkError):
    """A creation request (or a whole batch) failed validation."""
    
    def __init__(self, kind: ValidationErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class NotFoundError(ShortLinkError):
    """No link is registered under the given short code."""
    
    def __init__(self, short_code: str):
        super().__init__(f"Short code '{short_code}' not found")
        self.short_code = short_code


class TransportError(ShortLinkError):
    """Telemetry transmission failed. Never leaves the telemetry client."""
