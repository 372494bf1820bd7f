"""
Shared fixtures: an in-process fake Edge Data Store served by aiohttp.

The fake keeps types, streams and events in dicts, honours
Accept-Encoding: gzip on reads and computes Mean/Minimum/Maximum/Range
summaries over the "Value" property. Individual routes can be made to fail
through ``FakeEdsStore.failures``.
"""

import gzip
import json
import math
from datetime import datetime
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from eds_analytics.transport.aiohttp_client import AiohttpClient
from eds_analytics.transport.client import SdsClient
from eds_analytics.transport.config import StoreEndpoint

TENANT = "default"
NAMESPACE = "default"
PREFIX = "/api/v1/Tenants/{tenant}/Namespaces/{namespace}"


def parse_instant(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class FakeEdsStore:
    """Minimal in-memory stand-in for the store's REST surface."""

    def __init__(self):
        self.types: dict[str, dict[str, Any]] = {}
        self.streams: dict[str, dict[str, Any]] = {}
        self.events: dict[str, dict[datetime, dict[str, Any]]] = {}
        # route name -> (status, body) returned instead of the normal handling
        self.failures: dict[str, tuple[int, Any]] = {}
        self.corrupt_gzip = False
        self.requests: list[tuple[str, str]] = []
        self.accept_encodings: list[str | None] = []

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _injected(self, route: str) -> web.Response | None:
        if route in self.failures:
            status, body = self.failures[route]
            return web.json_response(body, status=status)
        return None

    def _json(self, request: web.Request, payload: Any) -> web.Response:
        self.accept_encodings.append(request.headers.get("Accept-Encoding"))
        data = json.dumps(payload).encode("utf-8")
        if "gzip" in request.headers.get("Accept-Encoding", ""):
            compressed = gzip.compress(data)
            if self.corrupt_gzip:
                compressed = compressed[: len(compressed) // 2]
            return web.Response(
                body=compressed,
                status=200,
                headers={
                    "Content-Type": "application/json",
                    "Content-Encoding": "gzip",
                },
            )
        return web.Response(
            body=data, status=200, headers={"Content-Type": "application/json"}
        )

    @web.middleware
    async def record(self, request: web.Request, handler):
        self.requests.append((request.method, request.path))
        return await handler(request)

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    async def create_type(self, request: web.Request) -> web.Response:
        if injected := self._injected("create_type"):
            return injected
        type_id = request.match_info["type_id"]
        if type_id in self.types:
            return web.json_response({"Error": f"Type {type_id} exists"}, status=409)
        body = await request.json()
        self.types[type_id] = body
        return web.json_response(body, status=201)

    async def delete_type(self, request: web.Request) -> web.Response:
        if injected := self._injected("delete_type"):
            return injected
        type_id = request.match_info["type_id"]
        if type_id not in self.types:
            return web.json_response({"Error": "Type not found"}, status=404)
        if any(s["TypeId"] == type_id for s in self.streams.values()):
            return web.json_response({"Error": "Type in use"}, status=409)
        del self.types[type_id]
        return web.Response(status=204)

    # ------------------------------------------------------------------
    # Streams
    # ------------------------------------------------------------------

    async def create_stream(self, request: web.Request) -> web.Response:
        if injected := self._injected("create_stream"):
            return injected
        stream_id = request.match_info["stream_id"]
        if stream_id in self.streams:
            return web.json_response({"Error": "Stream exists"}, status=409)
        body = await request.json()
        if body.get("TypeId") not in self.types:
            return web.json_response({"Error": "Unknown TypeId"}, status=400)
        self.streams[stream_id] = body
        self.events[stream_id] = {}
        return web.json_response(body, status=201)

    async def delete_stream(self, request: web.Request) -> web.Response:
        if injected := self._injected("delete_stream"):
            return injected
        stream_id = request.match_info["stream_id"]
        if stream_id not in self.streams:
            return web.json_response({"Error": "Stream not found"}, status=404)
        del self.streams[stream_id]
        del self.events[stream_id]
        return web.Response(status=204)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    async def write_data(self, request: web.Request) -> web.Response:
        if injected := self._injected("write_data"):
            return injected
        stream_id = request.match_info["stream_id"]
        if stream_id not in self.streams:
            return web.json_response({"Error": "Stream not found"}, status=404)
        batch = await request.json()
        keys = [parse_instant(e["Timestamp"]) for e in batch]
        if len(set(keys)) != len(keys) or any(k in self.events[stream_id] for k in keys):
            return web.json_response({"Error": "Duplicate index"}, status=409)
        for key, event in zip(keys, batch):
            self.events[stream_id][key] = event
        return web.Response(status=204)

    def _window(self, stream_id: str, start: datetime, end: datetime | None = None):
        return [
            self.events[stream_id][k]
            for k in sorted(self.events[stream_id])
            if k >= start and (end is None or k <= end)
        ]

    async def read_data(self, request: web.Request) -> web.Response:
        if injected := self._injected("read_data"):
            return injected
        stream_id = request.match_info["stream_id"]
        if stream_id not in self.streams:
            return web.json_response({"Error": "Stream not found"}, status=404)
        start = parse_instant(request.query["startIndex"])
        count = int(request.query["count"])
        return self._json(request, self._window(stream_id, start)[:count])

    async def read_summaries(self, request: web.Request) -> web.Response:
        if injected := self._injected("read_summaries"):
            return injected
        stream_id = request.match_info["stream_id"]
        if stream_id not in self.streams:
            return web.json_response({"Error": "Stream not found"}, status=404)
        start = parse_instant(request.query["startIndex"])
        end = parse_instant(request.query["endIndex"])
        values = [e["Value"] for e in self._window(stream_id, start, end)]
        summaries: dict[str, Any] = {"Count": {"Value": len(values)}}
        if values:
            summaries.update(
                {
                    "Mean": {"Value": math.fsum(values) / len(values)},
                    "Minimum": {"Value": min(values)},
                    "Maximum": {"Value": max(values)},
                    "Range": {"Value": max(values) - min(values)},
                }
            )
        record = {
            "Start": {"Timestamp": request.query["startIndex"]},
            "End": {"Timestamp": request.query["endIndex"]},
            "Summaries": summaries,
        }
        return self._json(request, [record])

    def make_app(self) -> web.Application:
        app = web.Application(middlewares=[self.record])
        app.router.add_post(PREFIX + "/Types/{type_id}", self.create_type)
        app.router.add_delete(PREFIX + "/Types/{type_id}", self.delete_type)
        app.router.add_post(PREFIX + "/Streams/{stream_id}", self.create_stream)
        app.router.add_delete(PREFIX + "/Streams/{stream_id}", self.delete_stream)
        app.router.add_post(PREFIX + "/Streams/{stream_id}/Data", self.write_data)
        app.router.add_get(PREFIX + "/Streams/{stream_id}/Data", self.read_data)
        app.router.add_get(
            PREFIX + "/Streams/{stream_id}/Data/Summaries", self.read_summaries
        )
        return app


# ============================================
# Fixtures
# ============================================


@pytest.fixture
def fake_store() -> FakeEdsStore:
    return FakeEdsStore()


@pytest_asyncio.fixture
async def store_server(fake_store):
    server = TestServer(fake_store.make_app())
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def endpoint(store_server) -> StoreEndpoint:
    return StoreEndpoint(
        host=store_server.host,
        port=store_server.port,
        tenant_id=TENANT,
        namespace_id=NAMESPACE,
    )


@pytest_asyncio.fixture
async def http_client():
    async with AiohttpClient() as client:
        yield client


@pytest.fixture
def sds_client(http_client, endpoint) -> SdsClient:
    return SdsClient(http_client, endpoint)
