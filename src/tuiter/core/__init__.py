"""Tuiter core package providing shared models and configuration."""
from .enums import AccountType, MaritalStatus
from .models import Follow, Location, TuiterBaseModel, User, UserUpdate, WriteAcknowledgment
from .settings import Environment, MongoSettings, TuiterSettings, configure_settings, get_settings

__all__ = [
    "AccountType",
    "MaritalStatus",
    "TuiterBaseModel",
    "Location",
    "User",
    "UserUpdate",
    "Follow",
    "WriteAcknowledgment",
    "Environment",
    "MongoSettings",
    "TuiterSettings",
    "configure_settings",
    "get_settings",
]
