"""Tuiter data access layer: async MongoDB DAOs for users and follows."""

from .container import DataAccessContainer, create_container, data_access

__version__ = "0.1.0"

__all__ = ["DataAccessContainer", "create_container", "data_access", "__version__"]
