"""
Pipeline Logging

structlog configuration for the extractor, resolver and strategy tools.
Events are snake_case names ("intent_resolved", "slow_operation") with
keyword fields; the operation being served is bound through contextvars.
"""

import logging
import sys
import time
from typing import Any

import structlog

Logger = structlog.stdlib.BoundLogger

# Tool calls above this threshold are reported as warnings
SLOW_OPERATION_MS = 100.0


def _base_chain(with_timestamp: bool) -> list:
    chain: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]
    if with_timestamp:
        chain.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
    chain += [structlog.processors.StackInfoRenderer(), structlog.processors.format_exc_info]
    return chain


def _renderer_chain(output: str) -> list:
    if output == "json":
        return [structlog.processors.EventRenamer("message"), structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def setup_logging(level: str = "INFO", format: str = "console", include_timestamp: bool = True) -> None:
    """
    Configure structlog and the stdlib root handler.

    Args:
        level: Threshold name, e.g. "DEBUG" or "WARNING"; unknown names mean INFO
        format: "json" for machine-readable lines, anything else for the console renderer
        include_timestamp: Prefix events with a UTC ISO timestamp
    """
    threshold = logging.getLevelName(level.upper())
    if not isinstance(threshold, int):
        threshold = logging.INFO

    # stdout belongs to --json payloads
    logging.basicConfig(stream=sys.stderr, level=threshold, format="%(message)s")

    structlog.configure(
        processors=_base_chain(include_timestamp) + _renderer_chain(format),
        context_class=dict,
        wrapper_class=Logger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Logger:
    """Module-level logger; call as ``logger = get_logger(__name__)``."""
    return structlog.get_logger(name)


def add_context(**fields: Any) -> None:
    structlog.contextvars.bind_contextvars(**fields)


def clear_context(*keys: str) -> None:
    """Unbind the given keys, or the whole context when called bare."""
    if keys:
        structlog.contextvars.unbind_contextvars(*keys)
        return
    structlog.contextvars.clear_contextvars()


def log_error(logger: Logger, message: str, error: Exception | None = None, **fields: Any) -> None:
    """
    Emit an error event, describing ``error`` by class name and text.

    The exception itself is not attached; callers that want a traceback
    should use ``logger.exception`` instead.
    """
    if error is not None:
        fields = {**fields, "error_type": error.__class__.__name__, "error_message": f"{error}"}
    logger.error(message, **fields)


def log_performance(logger: Logger, operation: str, duration_ms: float, **fields: Any) -> None:
    payload = dict(fields, operation=operation, duration_ms=round(duration_ms, 2), performance=True)
    if duration_ms <= SLOW_OPERATION_MS:
        logger.debug("operation_complete", **payload)
        return
    logger.warning("slow_operation", slow=True, **payload)


class LogPerformance:
    """
    Time a block and log the outcome.

    A clean exit goes through ``log_performance``; an exception is logged as
    ``<operation>_failed`` and then propagates. ``duration_ms`` stays readable
    after the block, which the tool boundary uses for its latency histogram.

    Example:
        ```python
        with LogPerformance(logger, "resolve_intent", tool="IntentResolver") as timer:
            resolver.resolve(analysis)
        record_histogram("intent_tool_latency_ms", timer.duration_ms)
        ```
    """

    def __init__(self, logger: Logger, operation: str, **fields: Any):
        self.logger = logger
        self.operation = operation
        self.fields = fields
        self.duration_ms = 0.0
        self._started = 0.0

    def __enter__(self) -> "LogPerformance":
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, _tb) -> bool:
        self.duration_ms = 1000 * (time.perf_counter() - self._started)
        if exc_type is None:
            log_performance(self.logger, self.operation, self.duration_ms, **self.fields)
        else:
            log_error(
                self.logger,
                self.operation + "_failed",
                error=exc,
                duration_ms=round(self.duration_ms, 2),
                **self.fields,
            )
        return False
