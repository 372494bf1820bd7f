"""HTTP communication abstractions for the store client.

Separates HTTP transport layer from resource semantics (paths, error mapping).
Allows easy mocking and swapping of HTTP implementations in tests.
"""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass
class HttpResponse:
    """HTTP response data container."""

    status_code: int
    body: Any  # JSON-decoded response body, raw text on failure, None if empty
    headers: dict[str, str]
    url: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class IHttpClient(Protocol):
    """Abstraction for HTTP client.

    Single Responsibility: Execute HTTP requests and return decoded responses.
    Does NOT handle:
    - Status code validation
    - Error mapping
    - Retry logic
    """

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        accept_gzip: bool = False,
    ) -> HttpResponse:
        """Execute GET request.

        Args:
            url: Full URL to request
            params: Query parameters
            headers: HTTP headers
            accept_gzip: Ask the server for a gzip-encoded body

        Raises:
            DecodeError: If the body cannot be decompressed or parsed
        """
        ...

    async def post(
        self,
        url: str,
        data: Any = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """Execute POST request.

        Args:
            url: Full URL to request
            data: Request body, JSON-serializable
            headers: HTTP headers
        """
        ...

    async def delete(
        self,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """Execute DELETE request."""
        ...

    async def close(self) -> None:
        """Release the underlying connection pool."""
        ...
