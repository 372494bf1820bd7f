"""
Structured logging infrastructure for eds-analytics.
Provides consistent, machine-readable logs across all layers.

Log Structure:
    {
        "app": "eds-analytics",        # Application identifier
        "layer": "transport",          # Architectural layer
        "component": "sds-client",     # Specific component
        "module": "...",               # Python module (optional)
        "stream_id": "SineWave",       # Domain context
        "event": "events_written",     # What happened
        ...
    }

Architectural Layers:
    - transport: HTTP access to the store (client, decoding)
    - provisioning: Type and stream lifecycle
    - exchange: Event serialization and summary queries
    - processing: In-memory filtering and aggregation
    - orchestration: Workflow sequencing
"""

import logging
import sys
from typing import Any, Literal

import structlog
from structlog.types import EventDict

Layer = Literal["transport", "provisioning", "exchange", "processing", "orchestration"]


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add application-wide context to every log entry.

    Keeps logs filterable when several tools write to the same aggregator.
    """
    event_dict["app"] = "eds-analytics"
    return event_dict


def add_severity_level(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Add severity level for cloud logging compatibility.
    Maps Python log levels to standard severity levels.
    """
    level = event_dict.get("level")
    if level:
        severity_map = {
            "debug": "DEBUG",
            "info": "INFO",
            "warning": "WARNING",
            "error": "ERROR",
            "critical": "CRITICAL",
        }
        event_dict["severity"] = severity_map.get(level, "INFO")
    return event_dict


def setup_logging(
    level: str = "INFO",
    json_logs: bool = True,
    include_timestamp: bool = True,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON. If False, use human-readable format (dev mode).
        include_timestamp: Whether to include ISO timestamps in logs

    Usage:
        >>> from eds_analytics.infrastructure.observability import setup_logging
        >>> setup_logging(level="DEBUG", json_logs=False)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        add_app_context,
        structlog.stdlib.add_log_level,
        add_severity_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    name: str | None = None,
    layer: Layer | None = None,
    component: str | None = None,
    **initial_context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance with architectural context.

    Args:
        name: Logger name (typically __name__ of the calling module)
        layer: Architectural layer
        component: Specific component within the layer
        **initial_context: Additional context key-value pairs to bind to logger

    Returns:
        Configured structlog logger with bound context

    Usage:
        >>> log = get_logger(__name__, layer="transport", component="sds-client")
        >>> log.info("events_written", stream_id="SineWave", count=100)
    """
    logger = structlog.get_logger(name)

    context = {}

    if layer:
        context["layer"] = layer

    if component:
        context["component"] = component

    if name:
        context["module"] = name

    context.update(initial_context)

    if context:
        logger = logger.bind(**context)

    return logger


# ============================================================================
# Layer-Specific Logger Factories
# ============================================================================


def get_transport_logger(
    component: str = "sds-client",
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for the transport layer.

    Usage:
        >>> log = get_transport_logger(tenant_id="default")
        >>> log.info("resource_created", kind="Types", resource_id="SineWave")
    """
    return get_logger("transport", layer="transport", component=component, **context)


def get_provisioning_logger(
    component: str = "provisioner",
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """Get a logger for type/stream provisioning."""
    return get_logger(
        "provisioning", layer="provisioning", component=component, **context
    )


def get_exchange_logger(
    component: str = "data-exchange",
    stream_id: str | None = None,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for the data exchange layer.

    Args:
        component: Component name
        stream_id: Stream being read or written (optional)
        **context: Additional context
    """
    ctx = {}
    if stream_id:
        ctx["stream_id"] = stream_id
    ctx.update(context)

    return get_logger("exchange", layer="exchange", component=component, **ctx)


def get_processing_logger(
    component: str,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for processing layer (filtering, aggregation).

    Usage:
        >>> log = get_processing_logger("aggregator")
        >>> log.info("aggregate_computed", mean=0.01)
    """
    return get_logger("processing", layer="processing", component=component, **context)


def get_orchestration_logger(
    component: str = "workflow",
    workflow_id: str | None = None,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """Get a logger for workflow orchestration."""
    ctx = {}
    if workflow_id:
        ctx["workflow_id"] = workflow_id
    ctx.update(context)

    return get_logger(
        "orchestration", layer="orchestration", component=component, **ctx
    )
