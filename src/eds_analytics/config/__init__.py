"""Configuration package for eds_analytics."""

from .state import (
    ConfigLoader,
    ConfigState,
    HttpConfig,
    LoggingConfig,
    StoreConfig,
    WorkflowConfig,
    get_config,
)

__all__ = [
    "ConfigLoader",
    "ConfigState",
    "HttpConfig",
    "LoggingConfig",
    "StoreConfig",
    "WorkflowConfig",
    "get_config",
]
