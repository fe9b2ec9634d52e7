"""Logging and tracing hooks.

The client logs through structlog and opens OpenTelemetry spans around
credential lookups, dispatch and each HTTP request. Nothing is exported
unless the embedding application installs an OpenTelemetry SDK; logs go
wherever structlog is configured to send them.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from collections.abc import Generator

    from .config import TelemetryConfig

_NAME = "wechat-api"
_VERSION = "0.1.0"

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40, "CRITICAL": 50}

# Replaced by configure_telemetry; created on first use otherwise.
_tracer: trace.Tracer | None = None
_logger: structlog.BoundLogger | None = None


def get_tracer() -> trace.Tracer:
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(_NAME, _VERSION)
    return _tracer


def get_logger() -> structlog.BoundLogger:
    """Logger shared by every client component."""
    global _logger
    if _logger is None:
        _logger = structlog.get_logger(_NAME)
    return _logger


def configure_telemetry(config: TelemetryConfig) -> None:
    """Set up JSON logging at ``config.log_level`` and a named tracer.

    With ``config.enabled`` false, spans become no-ops and structlog is left
    as the application configured it.
    """
    global _tracer, _logger

    if not config.enabled:
        _tracer = trace.NoOpTracer()
        return

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _log_level_to_int(config.log_level)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
    )

    _tracer = trace.get_tracer(config.service_name, _VERSION)
    _logger = structlog.get_logger(config.service_name)


def _log_level_to_int(level: str) -> int:
    # Unknown names fall back to INFO.
    return _LEVELS.get(level.upper(), 20)


@contextmanager
def trace_operation(
    name: str,
    *,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """Run the block inside a span named ``name``.

    Attributes whose value is ``None`` are skipped. An exception escaping the
    block marks the span as failed and is re-raised.
    """
    with get_tracer().start_as_current_span(name) as span:
        for key, value in (attributes or {}).items():
            if value is not None:
                span.set_attribute(key, value)
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            raise
