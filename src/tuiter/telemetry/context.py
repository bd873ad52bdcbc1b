"""Shared context helpers for request-scoped identifiers and structured logging."""
from __future__ import annotations

import json
import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Mapping, Optional

from opentelemetry import trace as _otel_trace

_SENSITIVE_KEYS = {
    "authorization",
    "cookie",
    "access_token",
    "refresh_token",
    "token",
    "password",
    "secret",
    "session",
    "session_id",
    "uri",
}
_REDACTED = "[REDACTED]"

_REQUEST_ID: ContextVar[Optional[str]] = ContextVar("tuiter_request_id", default=None)
_CORRELATION_ID: ContextVar[Optional[str]] = ContextVar("tuiter_correlation_id", default=None)
_USER_ID: ContextVar[Optional[str]] = ContextVar("tuiter_user_id", default=None)

STRUCTURED_LOGGER = logging.getLogger("tuiter.structured")

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def set_request_id(request_id: str) -> Token:
    """Bind a request identifier to the current context and return the token."""
    return _REQUEST_ID.set(request_id)


def get_request_id(default: Optional[str] = None) -> Optional[str]:
    """Return the current request identifier if one has been set."""
    return _REQUEST_ID.get() or default


def reset_request_id(token: Token) -> None:
    """Restore the request identifier context to a previous state."""
    _REQUEST_ID.reset(token)


def get_correlation_id(default: Optional[str] = None) -> Optional[str]:
    return _CORRELATION_ID.get() or default


def get_user_id(default: Optional[str] = None) -> Optional[str]:
    return _USER_ID.get() or default


def get_context() -> Dict[str, Optional[str]]:
    """Get all context variables as a dictionary."""
    return {
        "request_id": get_request_id(),
        "correlation_id": get_correlation_id(),
        "user_id": get_user_id(),
    }


@contextmanager
def request_id_context(request_id: str) -> Iterator[None]:
    """Context manager that temporarily sets the request identifier."""
    token = set_request_id(request_id)
    try:
        yield
    finally:
        reset_request_id(token)


@contextmanager
def correlation_context(
    correlation_id: Optional[str] = None,
    user_id: Optional[str] = None,
) -> Iterator[Dict[str, Optional[str]]]:
    """Temporarily bind correlation and user identifiers.

    A correlation id is generated when none is given. Both variables are
    restored on exit, even if the body raises.
    """
    correlation_token = _CORRELATION_ID.set(correlation_id or str(uuid.uuid4()))
    user_token = _USER_ID.set(user_id)
    try:
        yield get_context()
    finally:
        _USER_ID.reset(user_token)
        _CORRELATION_ID.reset(correlation_token)


def redact_sensitive_data(value: Any) -> Any:
    """Recursively redact sensitive keys inside mappings and sequences."""

    if isinstance(value, Mapping):
        redacted: Dict[Any, Any] = {}
        for key, item in value.items():
            if isinstance(key, str) and key.lower() in _SENSITIVE_KEYS:
                redacted[key] = _REDACTED
            else:
                redacted[key] = redact_sensitive_data(item)
        return redacted
    if isinstance(value, list):
        return [redact_sensitive_data(item) for item in value]
    if isinstance(value, tuple):
        return tuple(redact_sensitive_data(item) for item in value)
    return value


def get_trace_span_ids() -> tuple[Optional[str], Optional[str]]:
    """Return the current trace and span identifiers when a span is recording."""
    context = _otel_trace.get_current_span().get_span_context()
    if not context.is_valid:
        return None, None
    return f"{context.trace_id:032x}", f"{context.span_id:016x}"


def log_structured(level: str, event: str, **kwargs: Any) -> None:
    """Log a structured message with context information."""
    sanitized_kwargs = redact_sensitive_data(dict(kwargs)) if kwargs else {}
    trace_id, span_id = get_trace_span_ids()

    log_data = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "event": event,
        **get_context(),
        **sanitized_kwargs,
        "trace_id": trace_id,
        "span_id": span_id,
    }

    # Filter out None values
    log_data = {k: v for k, v in log_data.items() if v is not None}

    message = json.dumps(log_data, default=str, separators=(",", ":"))
    STRUCTURED_LOGGER.log(_LEVELS.get(level, logging.INFO), message)


def configure_logging(level: str = "INFO") -> None:
    """Install a stream handler on the root logger at ``level``."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logging.getLogger().setLevel(level.upper())


__all__ = [
    "STRUCTURED_LOGGER",
    "configure_logging",
    "correlation_context",
    "get_context",
    "get_correlation_id",
    "get_request_id",
    "get_trace_span_ids",
    "get_user_id",
    "log_structured",
    "redact_sensitive_data",
    "request_id_context",
    "reset_request_id",
    "set_request_id",
]
