"""DAO for user documents."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional, Union

from motor.motor_asyncio import AsyncIOMotorCollection

from ..core.models import User, UserUpdate, WriteAcknowledgment
from .base_dao import MongoDAO, parse_object_id

UserInput = Union[User, Mapping[str, Any]]
UserUpdateInput = Union[UserUpdate, User, Mapping[str, Any]]


def coerce_user(user: UserInput) -> User:
    """Validate ``user`` against the User schema."""
    if isinstance(user, User):
        return user
    return User.model_validate(user)


def coerce_user_update(user: UserUpdateInput) -> UserUpdate:
    """Reduce ``user`` to the fields the caller actually provided."""
    if isinstance(user, UserUpdate):
        return user
    if isinstance(user, User):
        return UserUpdate.model_validate(user.model_dump(exclude_unset=True, exclude={"id"}))
    return UserUpdate.model_validate(user)


class UserDAO(ABC):
    """Operations on the users collection.

    Lookups return None when nothing matches. Mutations return a
    WriteAcknowledgment and succeed with zero counts on a miss.
    Backend errors propagate unchanged.
    """

    @abstractmethod
    async def find_all_users(self) -> List[User]:
        """Return every user, in no particular order."""

    @abstractmethod
    async def find_user_by_id(self, uid: str) -> Optional[User]:
        """Return the user with primary key ``uid``."""

    @abstractmethod
    async def create_user(self, user: UserInput) -> User:
        """Insert ``user`` and return it with its generated id."""

    @abstractmethod
    async def update_user(self, uid: str, user: UserUpdateInput) -> WriteAcknowledgment:
        """Set the provided fields of user ``uid``; other fields are untouched."""

    @abstractmethod
    async def update_user_salary_by_username(self, username: str, salary: float) -> WriteAcknowledgment:
        """Set the salary of the user called ``username``."""

    @abstractmethod
    async def delete_user(self, uid: str) -> WriteAcknowledgment:
        """Remove user ``uid``."""

    @abstractmethod
    async def delete_all_users(self) -> WriteAcknowledgment:
        """Remove every user. Intended for tests and resets."""

    @abstractmethod
    async def find_user_by_credentials(self, username: str, password: str) -> Optional[User]:
        """Return the user whose username and password both match exactly."""

    @abstractmethod
    async def find_user_by_username(self, username: str) -> Optional[User]:
        """Return the user called ``username``."""


class MongoUserDAO(MongoDAO, UserDAO):
    """UserDAO over a MongoDB collection."""

    def __init__(self, collection: AsyncIOMotorCollection):
        super().__init__(collection)

    async def find_all_users(self) -> List[User]:
        async with self._operation("find_all_users"):
            documents = await self.collection.find({}).to_list(length=None)
        return [User.from_document(document) for document in documents]

    async def find_user_by_id(self, uid: str) -> Optional[User]:
        object_id = parse_object_id(uid)
        if object_id is None:
            return None
        async with self._operation("find_user_by_id", uid=uid):
            document = await self.collection.find_one({"_id": object_id})
        return User.from_document(document)

    async def create_user(self, user: UserInput) -> User:
        user = coerce_user(user)
        document = user.to_document()
        # ids are always generated by the database
        document.pop("_id", None)
        async with self._operation("create_user", username=user.username):
            result = await self.collection.insert_one(document)
        return user.model_copy(update={"id": str(result.inserted_id)})

    async def update_user(self, uid: str, user: UserUpdateInput) -> WriteAcknowledgment:
        changes = coerce_user_update(user).to_set_document()
        object_id = parse_object_id(uid)
        if object_id is None:
            return WriteAcknowledgment()
        async with self._operation("update_user", uid=uid, fields=sorted(changes)):
            if not changes:
                # $set rejects an empty document
                matched = await self.collection.count_documents({"_id": object_id}, limit=1)
                return WriteAcknowledgment(matched_count=matched)
            result = await self.collection.update_one({"_id": object_id}, {"$set": changes})
        return WriteAcknowledgment.from_update_result(result)

    async def update_user_salary_by_username(self, username: str, salary: float) -> WriteAcknowledgment:
        salary = UserUpdate(salary=salary).salary
        async with self._operation("update_user_salary_by_username", username=username):
            result = await self.collection.update_one({"username": username}, {"$set": {"salary": salary}})
        return WriteAcknowledgment.from_update_result(result)

    async def delete_user(self, uid: str) -> WriteAcknowledgment:
        object_id = parse_object_id(uid)
        if object_id is None:
            return WriteAcknowledgment()
        async with self._operation("delete_user", uid=uid):
            result = await self.collection.delete_one({"_id": object_id})
        return WriteAcknowledgment.from_delete_result(result)

    async def delete_all_users(self) -> WriteAcknowledgment:
        async with self._operation("delete_all_users"):
            result = await self.collection.delete_many({})
        return WriteAcknowledgment.from_delete_result(result)

    async def find_user_by_credentials(self, username: str, password: str) -> Optional[User]:
        # TODO: compare password hashes once stored passwords are hashed
        async with self._operation("find_user_by_credentials", username=username):
            document = await self.collection.find_one({"username": username, "password": password})
        return User.from_document(document)

    async def find_user_by_username(self, username: str) -> Optional[User]:
        async with self._operation("find_user_by_username", username=username):
            document = await self.collection.find_one({"username": username})
        return User.from_document(document)


__all__ = ["UserDAO", "MongoUserDAO", "coerce_user", "coerce_user_update"]
