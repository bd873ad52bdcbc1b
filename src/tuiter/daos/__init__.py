"""Data Access Objects (DAOs) for Tuiter entities.

Each DAO wraps one collection and maps one method to one database call.
Contracts (``UserDAO``, ``FollowDAO``) are abstract base classes; the
``Mongo*`` classes implement them over Motor and ``daos.test`` holds
in-memory implementations.

Design Principles:
- DAOs are async and hold no state beyond a collection handle
- Lookups return None (or an empty list) when nothing matches
- Mutations return a WriteAcknowledgment, never the updated document
- Backend errors are logged and propagate unchanged
"""

from .base_dao import BaseDAO, MongoDAO
from .follow_dao import FollowDAO, MongoFollowDAO
from .user_dao import MongoUserDAO, UserDAO

__all__ = [
    "BaseDAO",
    "MongoDAO",
    "UserDAO",
    "MongoUserDAO",
    "FollowDAO",
    "MongoFollowDAO",
]
