"""
Type/Stream Provisioner
=======================

Creates schemas ("types") and the streams bound to them, and deletes both.

Creation collisions surface as ResourceConflictError. Callers choose how to
treat them through ExistsPolicy:
    FAIL   - re-raise (default, a collision is a contract error)
    IGNORE - log and continue with the local definition
"""

from collections.abc import Sequence
from enum import Enum

from eds_analytics.infrastructure.observability import get_provisioning_logger
from eds_analytics.storage.schemas.types import SchemaType, Stream, TypeProperty
from eds_analytics.transport.client import ResourceKind, SdsClient
from eds_analytics.transport.exceptions import ResourceConflictError


class ExistsPolicy(str, Enum):
    """What to do when a resource id is already taken."""

    FAIL = "fail"
    IGNORE = "ignore"


class TypeStreamProvisioner:
    """Lifecycle of types and streams in one namespace."""

    def __init__(self, client: SdsClient, if_exists: ExistsPolicy = ExistsPolicy.FAIL):
        """
        Args:
            client: Transport client for the target namespace
            if_exists: Default collision policy for create calls
        """
        self.client = client
        self.if_exists = if_exists
        self.log = get_provisioning_logger()

    async def _create(
        self,
        kind: ResourceKind,
        resource_id: str,
        body: dict,
        if_exists: ExistsPolicy | None,
    ) -> None:
        policy = if_exists or self.if_exists
        try:
            await self.client.create_resource(kind, resource_id, body)
        except ResourceConflictError:
            if policy is ExistsPolicy.FAIL:
                raise
            self.log.warning(
                "resource_already_exists", kind=kind.value, resource_id=resource_id
            )

    async def create_type(
        self,
        type_id: str,
        name: str,
        properties: Sequence[TypeProperty],
        version: int = 1,
        if_exists: ExistsPolicy | None = None,
    ) -> SchemaType:
        """Register a schema with the store.

        Raises:
            ValueError/pydantic.ValidationError: If properties don't have exactly one key
            ResourceConflictError: If the id exists and the policy is FAIL
            TransportError: On any other store failure
        """
        sds_type = SchemaType(
            id=type_id, name=name, version=version, properties=tuple(properties)
        )
        self.log.info("creating_type", type_id=type_id, properties=len(properties))
        await self._create(ResourceKind.TYPE, type_id, sds_type.to_wire(), if_exists)
        return sds_type

    async def create_stream(
        self,
        sds_type: SchemaType,
        stream_id: str,
        name: str | None = None,
        if_exists: ExistsPolicy | None = None,
    ) -> Stream:
        """Create a stream bound to an existing type."""
        stream = Stream(id=stream_id, name=name or stream_id, type_id=sds_type.id)
        self.log.info("creating_stream", stream_id=stream_id, type_id=sds_type.id)
        await self._create(ResourceKind.STREAM, stream_id, stream.to_wire(), if_exists)
        return stream

    async def delete_stream(self, stream: Stream) -> None:
        self.log.info("deleting_stream", stream_id=stream.id)
        await self.client.delete_resource(ResourceKind.STREAM, stream.id)

    async def delete_type(self, sds_type: SchemaType) -> None:
        """Delete a type. Every stream referencing it must be gone first."""
        self.log.info("deleting_type", type_id=sds_type.id)
        await self.client.delete_resource(ResourceKind.TYPE, sds_type.id)
