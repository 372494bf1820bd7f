"""
Transport layer: HTTP access to the Edge Data Store.

Structure:
    transport/
    ├── ports.py           # IHttpClient protocol, HttpResponse
    ├── aiohttp_client.py  # aiohttp implementation with gzip decoding
    ├── client.py          # SdsClient: resource paths and status checks
    ├── error_mapper.py    # HTTP status -> exception
    └── exceptions.py      # Error hierarchy
"""

from eds_analytics.transport.aiohttp_client import AiohttpClient
from eds_analytics.transport.client import ResourceKind, SdsClient
from eds_analytics.transport.config import HttpClientConfig, StoreEndpoint
from eds_analytics.transport.exceptions import (
    DecodeError,
    EdsAnalyticsError,
    EmptyInputError,
    ResourceConflictError,
    TransportError,
)

__all__ = [
    "AiohttpClient",
    "DecodeError",
    "EdsAnalyticsError",
    "EmptyInputError",
    "HttpClientConfig",
    "ResourceConflictError",
    "ResourceKind",
    "SdsClient",
    "StoreEndpoint",
    "TransportError",
]
