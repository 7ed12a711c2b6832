"""
Observability Infrastructure

Structured logging and in-process metrics for the intent tools.
"""

from .logging import (
    LogPerformance,
    add_context,
    clear_context,
    get_logger,
    log_error,
    log_performance,
    setup_logging,
)
from .metrics import (
    INTENTS_RESOLVED,
    LAST_CONFIDENCE,
    TOOL_CALLS,
    TOOL_LATENCY,
    MetricsCollector,
    get_metrics_collector,
    record_counter,
    record_gauge,
    record_histogram,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "add_context",
    "clear_context",
    "log_error",
    "log_performance",
    "LogPerformance",
    # Metrics
    "TOOL_CALLS",
    "INTENTS_RESOLVED",
    "TOOL_LATENCY",
    "LAST_CONFIDENCE",
    "MetricsCollector",
    "get_metrics_collector",
    "record_counter",
    "record_gauge",
    "record_histogram",
]
