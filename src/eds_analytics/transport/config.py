"""Configuration value objects for dependency injection.

Instead of injecting the global settings object, inject specific configuration
dataclasses into each transport component.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuration for HTTP client."""

    timeout: float = 30.0
    connect_timeout: float = 10.0


@dataclass(frozen=True)
class StoreEndpoint:
    """Location of one tenant/namespace on an Edge Data Store."""

    host: str = "localhost"
    port: int = 5590
    scheme: str = "http"
    api_version: str = "v1"
    tenant_id: str = "default"
    namespace_id: str = "default"

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"

    @property
    def namespace_url(self) -> str:
        """Prefix shared by every resource path."""
        return (
            f"{self.base_url}/api/{self.api_version}"
            f"/Tenants/{self.tenant_id}/Namespaces/{self.namespace_id}"
        )
