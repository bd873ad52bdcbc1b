import os
import uuid
from typing import Any, Iterable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from tuiter.core.settings import MongoSettings, reset_settings
from tuiter.daos import MongoFollowDAO, MongoUserDAO
from tuiter.daos.test import FakeFollowDAO, FakeUserDAO
from tuiter.db import MongoClientManager

TEST_MONGO_URI_ENV = "TUITER_TEST_MONGO_URI"

BACKENDS = ["memory", pytest.param("mongodb", marks=pytest.mark.integration)]


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep ambient TUITER_* variables and cached settings out of each test."""
    for key in list(os.environ):
        if key.startswith("TUITER_") and key != TEST_MONGO_URI_ENV:
            monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    reset_settings()


def make_collection(name: str = "users", documents: Optional[Iterable[dict]] = None) -> MagicMock:
    """Mock Motor collection whose ``find`` cursor yields ``documents``."""
    collection = MagicMock()
    collection.name = name
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=list(documents or []))
    collection.find = MagicMock(return_value=cursor)
    for method in ("find_one", "insert_one", "update_one", "delete_one", "delete_many", "count_documents"):
        setattr(collection, method, AsyncMock())
    return collection


@pytest.fixture
def users_collection() -> MagicMock:
    return make_collection("users")


@pytest.fixture
def follows_collection() -> MagicMock:
    return make_collection("follows")


@pytest_asyncio.fixture
async def mongo_manager():
    """MongoClientManager on a throwaway database; skipped without a server."""
    uri = os.getenv(TEST_MONGO_URI_ENV)
    if not uri:
        pytest.skip(f"{TEST_MONGO_URI_ENV} not set")
    settings = MongoSettings(uri=uri, database=f"tuiter_test_{uuid.uuid4().hex[:12]}")
    manager = MongoClientManager(settings)
    await manager.ensure_indexes()
    try:
        yield manager
    finally:
        await manager.client.drop_database(settings.database)
        manager.close()


@pytest.fixture(params=BACKENDS)
def user_dao(request) -> Any:
    if request.param == "memory":
        return FakeUserDAO()
    manager = request.getfixturevalue("mongo_manager")
    return MongoUserDAO(manager.users)


@pytest.fixture(params=BACKENDS)
def follow_dao(request) -> Any:
    if request.param == "memory":
        return FakeFollowDAO()
    manager = request.getfixturevalue("mongo_manager")
    return MongoFollowDAO(manager.follows)
