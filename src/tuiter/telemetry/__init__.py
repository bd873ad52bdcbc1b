"""OpenTelemetry and structured logging helpers for Tuiter services."""
from __future__ import annotations

from typing import Any

from opentelemetry import trace

from .context import (
    configure_logging,
    correlation_context,
    get_context,
    log_structured,
    redact_sensitive_data,
    request_id_context,
)


def get_tracer(name: str) -> Any:
    """Return a tracer bound to the configured provider."""
    return trace.get_tracer(name)


__all__ = [
    "configure_logging",
    "correlation_context",
    "get_context",
    "get_tracer",
    "log_structured",
    "redact_sensitive_data",
    "request_id_context",
]
