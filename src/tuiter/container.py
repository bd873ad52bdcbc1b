"""Explicit wiring of the data layer.

Build one :class:`DataAccessContainer` at process start and hand its DAOs to
whatever needs them::

    async with data_access(get_settings()) as container:
        user = await container.user_dao.find_user_by_username("alice")
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from .core.settings import TuiterSettings, get_settings
from .daos.follow_dao import FollowDAO, MongoFollowDAO
from .daos.user_dao import MongoUserDAO, UserDAO
from .db.mongo import MongoClientManager
from .telemetry.context import configure_logging, log_structured


@dataclass
class DataAccessContainer:
    """DAOs sharing one client. ``mongo`` is None for in-memory wiring."""

    user_dao: UserDAO
    follow_dao: FollowDAO
    mongo: Optional[MongoClientManager] = None

    def close(self) -> None:
        if self.mongo is not None:
            self.mongo.close()


def create_container(
    settings: Optional[TuiterSettings] = None,
    mongo: Optional[MongoClientManager] = None,
) -> DataAccessContainer:
    """Create the MongoDB-backed DAOs from ``settings``."""
    settings = settings or get_settings()
    mongo = mongo or MongoClientManager(settings.mongo)
    container = DataAccessContainer(
        user_dao=MongoUserDAO(mongo.users),
        follow_dao=MongoFollowDAO(mongo.follows),
        mongo=mongo,
    )
    log_structured(
        "info",
        "data_access_container_created",
        environment=settings.environment.value,
        users_collection=settings.mongo.users_collection,
        follows_collection=settings.mongo.follows_collection,
    )
    return container


@asynccontextmanager
async def data_access(
    settings: Optional[TuiterSettings] = None,
    *,
    ensure_indexes: bool = True,
) -> AsyncIterator[DataAccessContainer]:
    """Configure logging, then yield a ready container and close its client on exit."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    container = create_container(settings)
    try:
        if ensure_indexes:
            await container.mongo.ensure_indexes()
        yield container
    finally:
        container.close()


__all__ = ["DataAccessContainer", "create_container", "data_access"]
