"""
Edge Data Store Exception Hierarchy

Provides specific exception types for store interaction failures,
enabling callers to tell transport, decoding and caller errors apart.
"""

from typing import Any


class EdsAnalyticsError(Exception):
    """Base exception for all eds-analytics errors."""

    pass


class TransportError(EdsAnalyticsError):
    """Non-success HTTP outcome from the store. Never retried."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
        url: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.url = url


class BadRequestError(TransportError):
    """400 - Malformed request or body rejected by the store."""

    pass


class AuthenticationError(TransportError):
    """401/403 - Caller is not allowed to access the tenant or namespace."""

    pass


class NotFoundError(TransportError):
    """404 - Type, stream or namespace does not exist."""

    pass


class ResourceConflictError(TransportError):
    """409 - A resource with the same id already exists."""

    pass


class ServerError(TransportError):
    """500+ - Server-side error."""

    pass


class DecodeError(EdsAnalyticsError):
    """Response body could not be decompressed, parsed or validated."""

    pass


class EmptyInputError(EdsAnalyticsError, ValueError):
    """Aggregate requested over an empty series."""

    pass


class DuplicateKeyError(EdsAnalyticsError, ValueError):
    """Two events in one write batch share the same key value."""

    def __init__(self, message: str, key: Any = None):
        super().__init__(message)
        self.key = key
