"""Tests for TypeStreamProvisioner against the fake store."""

import pytest

from eds_analytics.provisioning.provisioner import ExistsPolicy, TypeStreamProvisioner
from eds_analytics.provisioning.schema_builder import double_property, timestamp_key
from eds_analytics.transport.exceptions import (
    BadRequestError,
    ResourceConflictError,
)

PROPERTIES = [timestamp_key("Timestamp"), double_property("Value")]


@pytest.fixture
def provisioner(sds_client) -> TypeStreamProvisioner:
    return TypeStreamProvisioner(sds_client)


@pytest.mark.asyncio
class TestTypeStreamProvisioner:
    async def test_create_type_and_stream(self, fake_store, provisioner):
        sds_type = await provisioner.create_type("SineWave", "SineWave", PROPERTIES)
        stream = await provisioner.create_stream(sds_type, "Wave")

        assert fake_store.types["SineWave"]["Properties"][0]["IsKey"] is True
        assert fake_store.streams["Wave"] == {
            "Id": "Wave",
            "Name": "Wave",
            "TypeId": "SineWave",
        }
        assert stream.type_id == sds_type.id

    async def test_collision_fails_by_default(self, provisioner):
        await provisioner.create_type("SineWave", "SineWave", PROPERTIES)
        with pytest.raises(ResourceConflictError):
            await provisioner.create_type("SineWave", "SineWave", PROPERTIES)

    async def test_collision_ignored_when_asked(self, fake_store, provisioner):
        await provisioner.create_type("SineWave", "SineWave", PROPERTIES)
        again = await provisioner.create_type(
            "SineWave", "SineWave", PROPERTIES, if_exists=ExistsPolicy.IGNORE
        )
        assert again.id == "SineWave"
        assert len(fake_store.types) == 1

    async def test_ignore_policy_does_not_hide_other_errors(self, fake_store, sds_client):
        provisioner = TypeStreamProvisioner(sds_client, if_exists=ExistsPolicy.IGNORE)
        fake_store.failures["create_type"] = (400, {"Error": "bad type"})
        with pytest.raises(BadRequestError):
            await provisioner.create_type("SineWave", "SineWave", PROPERTIES)

    async def test_type_cannot_be_deleted_before_its_streams(self, provisioner):
        sds_type = await provisioner.create_type("SineWave", "SineWave", PROPERTIES)
        stream = await provisioner.create_stream(sds_type, "Wave")

        with pytest.raises(ResourceConflictError):
            await provisioner.delete_type(sds_type)

        await provisioner.delete_stream(stream)
        await provisioner.delete_type(sds_type)
