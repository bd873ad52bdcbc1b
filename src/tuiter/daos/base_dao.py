"""Base DAO and common functionality."""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection

from ..telemetry import get_tracer
from ..telemetry.context import log_structured

tracer = get_tracer(__name__)


class BaseDAO:
    """Base class for all Data Access Objects.

    Provides the plumbing every DAO shares:
    - A span per operation
    - Timing and structured logging of each call
    - Logging of failures before they propagate unchanged to the caller

    Subclasses wrap each backend call in :meth:`_operation`.
    """

    backend: str = "unknown"
    collection_name: str = ""

    @property
    def dao_name(self) -> str:
        return self.__class__.__name__

    @asynccontextmanager
    async def _operation(self, operation: str, **fields: Any) -> AsyncIterator[None]:
        """Trace, time and log a single backend call."""
        started = time.perf_counter()
        with tracer.start_as_current_span(f"{self.dao_name}.{operation}") as span:
            span.set_attribute("db.system", self.backend)
            span.set_attribute("db.collection.name", self.collection_name)
            try:
                yield
            except Exception as e:
                log_structured(
                    "error",
                    "dao_operation_failed",
                    dao_type=self.dao_name,
                    operation=operation,
                    duration_ms=round((time.perf_counter() - started) * 1000, 3),
                    error_type=type(e).__name__,
                    error=str(e),
                    **fields,
                )
                raise

        log_structured(
            "debug",
            "dao_operation_completed",
            dao_type=self.dao_name,
            operation=operation,
            duration_ms=round((time.perf_counter() - started) * 1000, 3),
            **fields,
        )


class MongoDAO(BaseDAO):
    """Base DAO for collection-backed data access through Motor."""

    backend = "mongodb"

    def __init__(self, collection: AsyncIOMotorCollection):
        """Initialize the DAO.

        Args:
            collection: Motor collection the DAO reads and writes
        """
        self.collection = collection
        self.collection_name = collection.name


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """Return ``value`` as an ObjectId, or None when it is not a valid one."""
    if isinstance(value, ObjectId):
        return value
    # ObjectId(None) would generate a fresh id
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except InvalidId:
        return None


__all__ = ["BaseDAO", "MongoDAO", "parse_object_id"]
