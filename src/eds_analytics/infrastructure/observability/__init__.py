"""
Observability for eds-analytics: structured logging shared by every layer.
"""

from .logging import (
    get_exchange_logger,
    # Base logger factory
    get_logger,
    get_orchestration_logger,
    get_processing_logger,
    get_provisioning_logger,
    # Layer-specific logger factories
    get_transport_logger,
    # Setup
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    # Base
    "get_logger",
    # Layer-specific
    "get_transport_logger",
    "get_provisioning_logger",
    "get_exchange_logger",
    "get_processing_logger",
    "get_orchestration_logger",
]
