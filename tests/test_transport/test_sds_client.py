"""
Tests for SdsClient: resource paths, status checks and error mapping.
"""

from datetime import UTC, datetime, timedelta

import pytest

from eds_analytics.transport.client import ResourceKind, SdsClient
from eds_analytics.transport.config import StoreEndpoint
from eds_analytics.transport.error_mapper import StoreErrorMapper
from eds_analytics.transport.exceptions import (
    AuthenticationError,
    BadRequestError,
    NotFoundError,
    ResourceConflictError,
    ServerError,
    TransportError,
)

T0 = datetime(2024, 1, 1, tzinfo=UTC)
TYPE_BODY = {"Id": "SineWave", "Name": "SineWave", "Version": 1, "Properties": []}
STREAM_BODY = {"Id": "SineWave", "Name": "SineWave", "TypeId": "SineWave"}


def events(n: int) -> list[dict]:
    return [
        {"Timestamp": (T0 + timedelta(seconds=i)).isoformat(), "Value": float(i)}
        for i in range(n)
    ]


class TestResourceUrl:
    def test_namespace_prefix(self):
        client = SdsClient(
            http=None,
            endpoint=StoreEndpoint(host="eds", port=5590, tenant_id="t", namespace_id="n"),
        )
        assert (
            client.resource_url(ResourceKind.TYPE, "SineWave")
            == "http://eds:5590/api/v1/Tenants/t/Namespaces/n/Types/SineWave"
        )
        assert client.resource_url(ResourceKind.STREAM, "S", "Data", "Summaries").endswith(
            "/Namespaces/n/Streams/S/Data/Summaries"
        )


class TestErrorMapper:
    @pytest.mark.parametrize(
        "status, error_type",
        [
            (400, BadRequestError),
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, NotFoundError),
            (409, ResourceConflictError),
            (500, ServerError),
            (503, ServerError),
            (418, TransportError),
        ],
    )
    def test_status_mapping(self, status, error_type):
        error = StoreErrorMapper.map_error(status, {"Error": "boom"}, "POST", "http://x")
        assert type(error) is error_type
        assert error.status_code == status
        assert error.body == {"Error": "boom"}
        assert "boom" in str(error)


@pytest.mark.asyncio
class TestSdsClientAgainstFakeStore:
    async def test_create_and_delete_type(self, fake_store, sds_client):
        await sds_client.create_resource(ResourceKind.TYPE, "SineWave", TYPE_BODY)
        assert fake_store.types["SineWave"] == TYPE_BODY

        await sds_client.delete_resource(ResourceKind.TYPE, "SineWave")
        assert "SineWave" not in fake_store.types

    async def test_duplicate_type_raises_conflict(self, sds_client):
        await sds_client.create_resource(ResourceKind.TYPE, "SineWave", TYPE_BODY)
        with pytest.raises(ResourceConflictError) as exc_info:
            await sds_client.create_resource(ResourceKind.TYPE, "SineWave", TYPE_BODY)
        assert exc_info.value.status_code == 409

    async def test_delete_missing_stream_raises_not_found(self, sds_client):
        with pytest.raises(NotFoundError):
            await sds_client.delete_resource(ResourceKind.STREAM, "missing")

    async def test_failure_carries_status_and_body(self, fake_store, sds_client):
        fake_store.failures["create_stream"] = (500, {"Error": "disk full"})
        with pytest.raises(ServerError) as exc_info:
            await sds_client.create_resource(ResourceKind.STREAM, "S", STREAM_BODY)
        assert exc_info.value.status_code == 500
        assert exc_info.value.body == {"Error": "disk full"}
        assert exc_info.value.url.endswith("/Streams/S")

    async def test_write_then_read_respects_count(self, fake_store, sds_client):
        await sds_client.create_resource(ResourceKind.TYPE, "SineWave", TYPE_BODY)
        await sds_client.create_resource(ResourceKind.STREAM, "SineWave", STREAM_BODY)
        await sds_client.write_events("SineWave", events(10))

        assert len(await sds_client.read_events("SineWave", T0, 4)) == 4
        assert len(await sds_client.read_events("SineWave", T0, 50)) == 10
        later = await sds_client.read_events("SineWave", T0 + timedelta(seconds=8), 50)
        assert [e["Value"] for e in later] == [8.0, 9.0]

    async def test_reads_ask_for_gzip(self, fake_store, sds_client):
        await sds_client.create_resource(ResourceKind.TYPE, "SineWave", TYPE_BODY)
        await sds_client.create_resource(ResourceKind.STREAM, "SineWave", STREAM_BODY)
        await sds_client.read_events("SineWave", T0, 1)
        await sds_client.read_summary("SineWave", T0, T0 + timedelta(seconds=1))
        assert fake_store.accept_encodings == ["gzip", "gzip"]

    async def test_rejected_batch_writes_nothing(self, fake_store, sds_client):
        await sds_client.create_resource(ResourceKind.TYPE, "SineWave", TYPE_BODY)
        await sds_client.create_resource(ResourceKind.STREAM, "SineWave", STREAM_BODY)
        fake_store.failures["write_data"] = (400, {"Error": "bad event"})

        with pytest.raises(BadRequestError):
            await sds_client.write_events("SineWave", events(3))
        assert fake_store.events["SineWave"] == {}

    async def test_read_summary_returns_framed_body(self, sds_client):
        await sds_client.create_resource(ResourceKind.TYPE, "SineWave", TYPE_BODY)
        await sds_client.create_resource(ResourceKind.STREAM, "SineWave", STREAM_BODY)
        await sds_client.write_events("SineWave", events(3))

        raw = await sds_client.read_summary("SineWave", T0, T0 + timedelta(seconds=3))
        assert isinstance(raw, list) and len(raw) == 1
        assert raw[0]["Summaries"]["Mean"]["Value"] == pytest.approx(1.0)
