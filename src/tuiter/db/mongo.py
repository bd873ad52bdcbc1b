"""MongoDB client lifecycle using Motor."""
from __future__ import annotations

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, IndexModel

from ..core.settings import MongoSettings
from ..telemetry.context import log_structured


class MongoClientManager:
    """Owns the single Motor client for the process.

    The client is created lazily on first use and closed by :meth:`close`.
    Collections are resolved by the names configured in :class:`MongoSettings`.
    """

    def __init__(self, settings: MongoSettings, client: Optional[AsyncIOMotorClient] = None):
        self.settings = settings
        self._client = client

    @property
    def client(self) -> AsyncIOMotorClient:
        if self._client is None:
            self._client = AsyncIOMotorClient(
                self.settings.connection_uri,
                serverSelectionTimeoutMS=self.settings.server_selection_timeout_ms,
                maxPoolSize=self.settings.max_pool_size,
                appname=self.settings.app_name,
                tz_aware=True,
            )
            log_structured(
                "info",
                "mongo_client_created",
                host=self.settings.host,
                database=self.settings.database,
            )
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self.client[self.settings.database]

    @property
    def users(self) -> AsyncIOMotorCollection:
        return self.database[self.settings.users_collection]

    @property
    def follows(self) -> AsyncIOMotorCollection:
        return self.database[self.settings.follows_collection]

    async def ping(self) -> bool:
        """Round-trip a ``ping`` command; raises the driver error when unreachable."""
        result = await self.client.admin.command("ping")
        return bool(result.get("ok"))

    async def ensure_indexes(self) -> None:
        """Create the indexes the DAOs rely on. Safe to call repeatedly."""
        await self.users.create_indexes([
            IndexModel([("username", ASCENDING)], unique=True, name="username_unique"),
        ])
        await self.follows.create_indexes([
            IndexModel(
                [("userFollowing", ASCENDING), ("userFollowed", ASCENDING)],
                unique=True,
                name="follow_edge_unique",
            ),
            IndexModel([("userFollowed", ASCENDING)], name="followed_lookup"),
        ])
        log_structured("info", "mongo_indexes_ensured", database=self.settings.database)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            log_structured("info", "mongo_client_closed", database=self.settings.database)


__all__ = ["MongoClientManager"]
