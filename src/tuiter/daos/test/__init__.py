"""In-memory DAO backends for tests.

Implement the same contracts as the MongoDB DAOs so services can be
exercised without a database.
"""

from .fake_follow_dao import FakeFollowDAO
from .fake_user_dao import FakeUserDAO

__all__ = [
    "FakeUserDAO",
    "FakeFollowDAO",
]
