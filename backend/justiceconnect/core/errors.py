"""
Error taxonomy shared by the API layer, the core pipeline and the adapters.

Every error carries the HTTP status it maps to and an optional ``details``
payload. The FastAPI exception handlers in ``main.py`` render them as
``{"error": ..., "details": ...}``.
"""

from typing import Any, Optional


class JusticeConnectError(Exception):
    """Base class for all service errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None,
                 details: Any = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidRequest(JusticeConnectError):
    """Missing or malformed request field. Not retryable."""

    status_code = 400


class Unauthorized(JusticeConnectError):
    """Missing or invalid bearer token, or bad credentials."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized", details: Any = None):
        super().__init__(message, details=details)


class UpstreamError(JusticeConnectError):
    """Completion or identity provider failure."""

    status_code = 502


class ConfigurationError(JusticeConnectError):
    """A required provider credential is not configured."""

    status_code = 500


class PersistenceError(JusticeConnectError):
    """History store read/write failure."""

    status_code = 500


class StorageError(PersistenceError):
    """Raised by a KVStore backend when it cannot complete an operation."""
