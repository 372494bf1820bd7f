"""Provisioning layer: schema building and type/stream lifecycle."""

from eds_analytics.provisioning.provisioner import ExistsPolicy, TypeStreamProvisioner
from eds_analytics.provisioning.schema_builder import (
    build_property,
    double_property,
    timestamp_key,
)

__all__ = [
    "ExistsPolicy",
    "TypeStreamProvisioner",
    "build_property",
    "double_property",
    "timestamp_key",
]
