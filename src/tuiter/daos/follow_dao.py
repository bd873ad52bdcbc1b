"""DAO for follow edges between users."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from motor.motor_asyncio import AsyncIOMotorCollection

from ..core.models import Follow, WriteAcknowledgment
from .base_dao import MongoDAO


class FollowDAO(ABC):
    """Operations on follow edges.

    An edge ``(uid, ouid)`` means user ``uid`` follows user ``ouid``.
    """

    @abstractmethod
    async def find_all_follows(self) -> List[Follow]:
        """Return every follow edge."""

    @abstractmethod
    async def user_follows_user(self, uid: str, ouid: str) -> Follow:
        """Record that ``uid`` follows ``ouid`` and return the new edge."""

    @abstractmethod
    async def user_unfollows_user(self, uid: str, ouid: str) -> WriteAcknowledgment:
        """Remove the edge ``uid -> ouid``."""

    @abstractmethod
    async def find_all_users_following_user(self, uid: str) -> List[Follow]:
        """Return the edges whose followed user is ``uid``."""

    @abstractmethod
    async def find_all_users_followed_by_user(self, uid: str) -> List[Follow]:
        """Return the edges whose follower is ``uid``."""

    @abstractmethod
    async def find_follow_by_users(self, uid: str, ouid: str) -> List[Follow]:
        """Return the edges ``uid -> ouid``; empty when ``uid`` does not follow ``ouid``."""


class MongoFollowDAO(MongoDAO, FollowDAO):
    """FollowDAO over a MongoDB collection.

    Edge uniqueness comes from the ``follow_edge_unique`` index; following
    twice raises ``pymongo.errors.DuplicateKeyError``.
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        super().__init__(collection)

    async def _find(self, operation: str, query: dict, **fields) -> List[Follow]:
        async with self._operation(operation, **fields):
            documents = await self.collection.find(query).to_list(length=None)
        return [Follow.from_document(document) for document in documents]

    async def find_all_follows(self) -> List[Follow]:
        return await self._find("find_all_follows", {})

    async def user_follows_user(self, uid: str, ouid: str) -> Follow:
        follow = Follow(user_following=uid, user_followed=ouid)
        async with self._operation("user_follows_user", uid=uid, ouid=ouid):
            result = await self.collection.insert_one(follow.to_document())
        return follow.model_copy(update={"id": str(result.inserted_id)})

    async def user_unfollows_user(self, uid: str, ouid: str) -> WriteAcknowledgment:
        async with self._operation("user_unfollows_user", uid=uid, ouid=ouid):
            result = await self.collection.delete_one({"userFollowing": uid, "userFollowed": ouid})
        return WriteAcknowledgment.from_delete_result(result)

    async def find_all_users_following_user(self, uid: str) -> List[Follow]:
        return await self._find("find_all_users_following_user", {"userFollowed": uid}, uid=uid)

    async def find_all_users_followed_by_user(self, uid: str) -> List[Follow]:
        return await self._find("find_all_users_followed_by_user", {"userFollowing": uid}, uid=uid)

    async def find_follow_by_users(self, uid: str, ouid: str) -> List[Follow]:
        return await self._find(
            "find_follow_by_users",
            {"userFollowing": uid, "userFollowed": ouid},
            uid=uid,
            ouid=ouid,
        )


__all__ = ["FollowDAO", "MongoFollowDAO"]
