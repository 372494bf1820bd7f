"""
Store Error Mapper

Maps HTTP status codes and response bodies to specific exception types,
providing context-rich error messages for debugging.
"""

from typing import Any

from .exceptions import (
    AuthenticationError,
    BadRequestError,
    NotFoundError,
    ResourceConflictError,
    ServerError,
    TransportError,
)


class StoreErrorMapper:
    """Maps HTTP status codes to appropriate exception types."""

    @staticmethod
    def extract_error_message(response_body: Any) -> str:
        """Extract error message from response body."""
        if isinstance(response_body, str):
            return response_body
        elif isinstance(response_body, dict):
            # EDS puts the reason under OperationId/Error/Reason
            return (
                response_body.get("Error")
                or response_body.get("Reason")
                or response_body.get("Message")
                or str(response_body)
            )
        else:
            return str(response_body)

    @staticmethod
    def map_error(
        status_code: int,
        response_body: Any,
        method: str,
        url: str,
    ) -> TransportError:
        """
        Map HTTP status code to specific exception with context.

        Args:
            status_code: HTTP status code
            response_body: Response body (dict, str, or other)
            method: HTTP method of the failed request
            url: Request URL

        Returns:
            Appropriate TransportError subclass instance
        """
        error_msg = StoreErrorMapper.extract_error_message(response_body)
        endpoint = f"{method} {url}"
        context = {"status_code": status_code, "body": response_body, "url": url}

        if status_code == 400:
            return BadRequestError(
                f"Bad request for {endpoint}: {error_msg}", **context
            )
        elif status_code in (401, 403):
            return AuthenticationError(
                f"Not authorized for {endpoint}: {error_msg}", **context
            )
        elif status_code == 404:
            return NotFoundError(
                f"Resource not found for {endpoint}: {error_msg}", **context
            )
        elif status_code == 409:
            return ResourceConflictError(
                f"Resource already exists for {endpoint}: {error_msg}", **context
            )
        elif status_code >= 500:
            return ServerError(
                f"Server error {status_code} for {endpoint}: {error_msg}", **context
            )
        else:
            return TransportError(
                f"Unexpected status {status_code} for {endpoint}: {error_msg}",
                **context,
            )
