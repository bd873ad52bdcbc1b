"""Database module - MongoDB client lifecycle."""

from .mongo import MongoClientManager

__all__ = ["MongoClientManager"]
