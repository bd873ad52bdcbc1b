"""Fake UserDAO for testing."""

import asyncio
from typing import Dict, List, Optional

from bson import ObjectId
from pymongo.errors import AutoReconnect, DuplicateKeyError

from ...core.models import User, WriteAcknowledgment
from ..base_dao import BaseDAO, parse_object_id
from ..user_dao import UserDAO, UserInput, UserUpdateInput, coerce_user, coerce_user_update


class FakeUserDAO(BaseDAO, UserDAO):
    """In-memory implementation of UserDAO for testing.

    Mirrors the MongoDB backend: ids are ObjectId strings, usernames are
    unique, and lookups hand out copies so callers cannot mutate the store.
    """

    backend = "memory"
    collection_name = "users"

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._query_delay = 0.0
        self._fail_next_operations = False
        self._operation_count = 0

    @property
    def operation_count(self) -> int:
        return self._operation_count

    def fail_next_operation(self) -> None:
        """Make the next call raise a simulated connection error."""
        self._fail_next_operations = True

    def inject_user(self, user: User) -> User:
        """Store ``user`` directly, assigning an id when it has none."""
        if not user.id:
            user = user.model_copy(update={"id": str(ObjectId())})
        self._users[user.id] = user
        return user

    async def _tick(self) -> None:
        await asyncio.sleep(self._query_delay)
        if self._fail_next_operations:
            self._fail_next_operations = False
            raise AutoReconnect("Simulated connection failure")
        self._operation_count += 1

    def _username_taken(self, username: str, exclude_id: Optional[str] = None) -> bool:
        return any(u.username == username and u.id != exclude_id for u in self._users.values())

    async def find_all_users(self) -> List[User]:
        async with self._operation("find_all_users"):
            await self._tick()
        return [user.model_copy(deep=True) for user in self._users.values()]

    async def find_user_by_id(self, uid: str) -> Optional[User]:
        async with self._operation("find_user_by_id", uid=uid):
            await self._tick()
        user = self._users.get(str(uid)) if parse_object_id(uid) else None
        return user.model_copy(deep=True) if user else None

    async def create_user(self, user: UserInput) -> User:
        user = coerce_user(user)
        async with self._operation("create_user", username=user.username):
            await self._tick()
            if self._username_taken(user.username):
                raise DuplicateKeyError(f"E11000 duplicate key error dup key: {{ username: \"{user.username}\" }}")
        created = user.model_copy(update={"id": str(ObjectId())}, deep=True)
        self._users[created.id] = created
        return created.model_copy(deep=True)

    async def update_user(self, uid: str, user: UserUpdateInput) -> WriteAcknowledgment:
        changes = coerce_user_update(user).model_dump(exclude_unset=True)
        async with self._operation("update_user", uid=uid, fields=sorted(changes)):
            await self._tick()
            stored = self._users.get(str(uid))
            if stored is None:
                return WriteAcknowledgment()
            if "username" in changes and self._username_taken(changes["username"], exclude_id=stored.id):
                raise DuplicateKeyError(f"E11000 duplicate key error dup key: {{ username: \"{changes['username']}\" }}")
            updated = User.model_validate({**stored.model_dump(), **changes})
        self._users[stored.id] = updated
        return WriteAcknowledgment(matched_count=1, modified_count=int(updated != stored))

    async def update_user_salary_by_username(self, username: str, salary: float) -> WriteAcknowledgment:
        salary = coerce_user_update({"salary": salary}).salary
        async with self._operation("update_user_salary_by_username", username=username):
            await self._tick()
        for stored in self._users.values():
            if stored.username == username:
                modified = stored.salary != salary
                self._users[stored.id] = stored.model_copy(update={"salary": salary})
                return WriteAcknowledgment(matched_count=1, modified_count=int(modified))
        return WriteAcknowledgment()

    async def delete_user(self, uid: str) -> WriteAcknowledgment:
        async with self._operation("delete_user", uid=uid):
            await self._tick()
        removed = self._users.pop(str(uid), None)
        return WriteAcknowledgment(deleted_count=int(removed is not None))

    async def delete_all_users(self) -> WriteAcknowledgment:
        async with self._operation("delete_all_users"):
            await self._tick()
        count = len(self._users)
        self._users.clear()
        return WriteAcknowledgment(deleted_count=count)

    async def find_user_by_credentials(self, username: str, password: str) -> Optional[User]:
        async with self._operation("find_user_by_credentials", username=username):
            await self._tick()
        for user in self._users.values():
            if user.username == username and user.password == password:
                return user.model_copy(deep=True)
        return None

    async def find_user_by_username(self, username: str) -> Optional[User]:
        async with self._operation("find_user_by_username", username=username):
            await self._tick()
        for user in self._users.values():
            if user.username == username:
                return user.model_copy(deep=True)
        return None
