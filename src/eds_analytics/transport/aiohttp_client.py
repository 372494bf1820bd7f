"""Concrete HTTP client implementation for async requests.

Wraps aiohttp behind IHttpClient abstraction. Automatic decompression is
disabled on the session so gzip bodies are decoded here, driven by the
Content-Encoding header.
"""

import gzip
import json
import logging
import zlib
from typing import Any

import aiohttp

from eds_analytics.transport.config import HttpClientConfig
from eds_analytics.transport.exceptions import DecodeError
from eds_analytics.transport.ports import HttpResponse, IHttpClient

logger = logging.getLogger(__name__)

_IDENTITY_ENCODINGS = ("", "identity")


def decode_body(raw: bytes, content_encoding: str | None, strict: bool = True) -> Any:
    """Decompress and JSON-decode a fully buffered response body.

    Args:
        raw: Complete body bytes as received on the wire
        content_encoding: Value of the Content-Encoding response header
        strict: If False, a body that is not JSON is returned as text
            instead of raising (used for error responses)

    Returns:
        Decoded JSON value, text, or None for an empty body

    Raises:
        DecodeError: On truncated/corrupt gzip, unsupported encoding or bad JSON
    """
    encoding = (content_encoding or "").strip().lower()

    if encoding == "gzip":
        try:
            raw = gzip.decompress(raw)
        except (OSError, EOFError, zlib.error) as e:
            raise DecodeError(f"Failed to decompress gzip body: {e}") from e
    elif encoding not in _IDENTITY_ENCODINGS:
        raise DecodeError(f"Unsupported Content-Encoding: {content_encoding}")

    if not raw:
        return None

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Response body is not valid UTF-8: {e}") from e

    try:
        return json.loads(text)
    except ValueError as e:
        if not strict:
            return text
        raise DecodeError(f"Response body is not valid JSON: {e}") from e


class AiohttpClient(IHttpClient):
    """HTTP client implementation using aiohttp."""

    def __init__(self, config: HttpClientConfig | None = None):
        """Initialize HTTP client.

        Args:
            config: HTTP client configuration
        """
        self.config = config or HttpClientConfig()
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "AiohttpClient":
        await self._get_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None:
            timeout = aiohttp.ClientTimeout(
                total=self.config.timeout, connect=self.config.connect_timeout
            )
            self._session = aiohttp.ClientSession(
                timeout=timeout, auto_decompress=False
            )
        return self._session

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        data: Any = None,
        headers: dict[str, str] | None = None,
        accept_gzip: bool = False,
    ) -> HttpResponse:
        session = await self._get_session()
        request_headers = {"Accept-Encoding": "gzip" if accept_gzip else "identity"}
        if headers:
            request_headers.update(headers)

        kwargs: dict[str, Any] = {"params": params, "headers": request_headers}
        if data is not None:
            kwargs["json"] = data

        async with session.request(method, url, **kwargs) as resp:
            # Drain the whole body before any decoding
            raw = await resp.read()
            ok = 200 <= resp.status < 300
            try:
                body = decode_body(
                    raw, resp.headers.get(aiohttp.hdrs.CONTENT_ENCODING), strict=ok
                )
            except DecodeError:
                if ok:
                    raise
                # Keep the status: the caller maps it to a TransportError
                body = raw.decode("utf-8", errors="replace")
            logger.debug(
                f"{method} {resp.url} -> {resp.status} "
                f"({len(raw)} bytes, encoding={resp.headers.get('Content-Encoding')})"
            )
            return HttpResponse(
                status_code=resp.status,
                body=body,
                headers=dict(resp.headers),
                url=str(resp.url),
            )

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        accept_gzip: bool = False,
    ) -> HttpResponse:
        """Execute GET request.

        Args:
            url: Full URL
            params: Query parameters
            headers: HTTP headers
            accept_gzip: Send Accept-Encoding: gzip

        Returns:
            HttpResponse with status, decoded body, headers

        Raises:
            DecodeError: On a corrupt or non-JSON success body
            aiohttp.ClientError: On connection errors
        """
        return await self._request(
            "GET", url, params=params, headers=headers, accept_gzip=accept_gzip
        )

    async def post(
        self,
        url: str,
        data: Any = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """Execute POST request with a JSON body.

        Raises:
            aiohttp.ClientError: On connection errors
        """
        return await self._request("POST", url, data=data, headers=headers)

    async def delete(
        self,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """Execute DELETE request."""
        return await self._request("DELETE", url, headers=headers)

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
