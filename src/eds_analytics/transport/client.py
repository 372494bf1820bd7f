"""Transport client for the Edge Data Store REST API.

Builds resource URLs under a tenant/namespace prefix, checks status codes
and maps failures to typed exceptions. Bodies go in and come out as plain
JSON values; typed (de)serialization lives in the exchange layer.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from eds_analytics.common.utils.date_utils import to_iso_instant
from eds_analytics.infrastructure.observability import get_transport_logger
from eds_analytics.transport.config import StoreEndpoint
from eds_analytics.transport.error_mapper import StoreErrorMapper
from eds_analytics.transport.exceptions import DecodeError
from eds_analytics.transport.ports import HttpResponse, IHttpClient


class ResourceKind(str, Enum):
    """Top-level resource collections in a namespace."""

    TYPE = "Types"
    STREAM = "Streams"


class SdsClient:
    """Create, delete, write and read resources in one store namespace.

    The HTTP client is injected and owned by the caller, which is
    responsible for closing it.
    """

    def __init__(self, http: IHttpClient, endpoint: StoreEndpoint):
        self.http = http
        self.endpoint = endpoint
        self.log = get_transport_logger(
            tenant_id=endpoint.tenant_id, namespace_id=endpoint.namespace_id
        )

    def resource_url(self, kind: ResourceKind, resource_id: str, *parts: str) -> str:
        """URL of a resource, optionally followed by sub-paths (e.g. "Data")."""
        segments = [self.endpoint.namespace_url, kind.value, resource_id, *parts]
        return "/".join(segments)

    def _check(self, response: HttpResponse, method: str) -> HttpResponse:
        if not response.ok:
            self.log.error(
                "request_failed",
                method=method,
                url=response.url,
                status_code=response.status_code,
            )
            raise StoreErrorMapper.map_error(
                response.status_code, response.body, method, response.url
            )
        return response

    async def create_resource(
        self, kind: ResourceKind, resource_id: str, body: dict[str, Any]
    ) -> None:
        """POST a type or stream definition.

        Raises:
            ResourceConflictError: If the id is already taken
            TransportError: On any other non-2xx status
        """
        url = self.resource_url(kind, resource_id)
        response = await self.http.post(url, data=body)
        self._check(response, "POST")
        self.log.info("resource_created", kind=kind.value, resource_id=resource_id)

    async def delete_resource(self, kind: ResourceKind, resource_id: str) -> None:
        """DELETE a type or stream."""
        url = self.resource_url(kind, resource_id)
        response = await self.http.delete(url)
        self._check(response, "DELETE")
        self.log.info("resource_deleted", kind=kind.value, resource_id=resource_id)

    async def write_events(self, stream_id: str, events: list[dict[str, Any]]) -> None:
        """POST a whole batch of serialized events in one request.

        The store accepts or rejects the batch as a unit.
        """
        url = self.resource_url(ResourceKind.STREAM, stream_id, "Data")
        response = await self.http.post(url, data=events)
        self._check(response, "POST")
        self.log.info("events_written", stream_id=stream_id, count=len(events))

    async def read_events(
        self, stream_id: str, start: datetime, count: int
    ) -> list[dict[str, Any]]:
        """GET up to ``count`` events at or after ``start``, gzip accepted.

        Raises:
            DecodeError: If the body is corrupt or not a JSON array
        """
        url = self.resource_url(ResourceKind.STREAM, stream_id, "Data")
        params = {"startIndex": to_iso_instant(start), "count": str(count)}
        response = self._check(
            await self.http.get(url, params=params, accept_gzip=True), "GET"
        )
        body = response.body if response.body is not None else []
        if not isinstance(body, list):
            raise DecodeError(
                f"Expected a JSON array of events from {response.url}, "
                f"got {type(body).__name__}"
            )
        self.log.info(
            "events_read",
            stream_id=stream_id,
            count=len(body),
            content_encoding=response.headers.get("Content-Encoding"),
        )
        return body

    async def read_summary(
        self, stream_id: str, start: datetime, end: datetime
    ) -> Any:
        """GET one summary record across ``[start, end]``.

        Returns the decoded body unchanged (a single-element JSON array).
        """
        url = self.resource_url(ResourceKind.STREAM, stream_id, "Data", "Summaries")
        params = {
            "startIndex": to_iso_instant(start),
            "endIndex": to_iso_instant(end),
            "count": "1",
        }
        response = self._check(
            await self.http.get(url, params=params, accept_gzip=True), "GET"
        )
        self.log.info("summary_read", stream_id=stream_id)
        return response.body
