"""Domain models implemented with Pydantic v2.

Documents are stored with camelCase keys; Python code uses snake_case
attributes. ``_id`` is exposed as ``id`` in its string form.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .enums import AccountType, MaritalStatus


def _utcnow() -> datetime:
    return _to_millis(datetime.now(timezone.utc))


def _to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision, which BSON dates cannot hold."""
    return value.replace(microsecond=value.microsecond - value.microsecond % 1000)


class TuiterBaseModel(BaseModel):
    """Base model shared by stored documents."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        use_enum_values=True,
        extra="ignore",
    )

    @field_validator("id", mode="before", check_fields=False)
    @classmethod
    def _stringify_object_id(cls, value: Any) -> Any:
        if isinstance(value, ObjectId):
            return str(value)
        return value

    @classmethod
    def from_document(cls, document: Optional[Mapping[str, Any]]):
        """Build a model from a raw MongoDB document, passing ``None`` through."""
        if document is None:
            return None
        return cls.model_validate(document)

    def to_document(self) -> Dict[str, Any]:
        """Serialise for insertion, leaving ``_id`` to the database when unset."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Location(TuiterBaseModel):
    """Geographic coordinates of a user."""

    latitude: float = Field(default=0.0, ge=-90, le=90)
    longitude: float = Field(default=0.0, ge=-180, le=180)


class User(TuiterBaseModel):
    """A registered account."""

    id: Optional[str] = Field(default=None, alias="_id")
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    salary: float = Field(default=50000, ge=0)

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    profile_photo: Optional[str] = None
    header_image: Optional[str] = None
    biography: Optional[str] = None
    date_of_birth: Optional[date] = None
    account_type: AccountType = AccountType.PERSONAL
    marital_status: MaritalStatus = MaritalStatus.SINGLE
    location: Optional[Location] = None
    joined: datetime = Field(default_factory=_utcnow)

    @field_validator("joined")
    @classmethod
    def _joined_to_millis(cls, value: datetime) -> datetime:
        return _to_millis(value)

    def to_document(self) -> Dict[str, Any]:
        document = super().to_document()
        # bson has no date type
        if self.date_of_birth is not None:
            document["dateOfBirth"] = datetime.combine(self.date_of_birth, datetime.min.time())
        return document


class UserUpdate(TuiterBaseModel):
    """Partial set of user fields; only fields the caller sets are written."""

    username: Optional[str] = Field(default=None, min_length=1)
    password: Optional[str] = Field(default=None, min_length=1)
    salary: Optional[float] = Field(default=None, ge=0)

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    profile_photo: Optional[str] = None
    header_image: Optional[str] = None
    biography: Optional[str] = None
    date_of_birth: Optional[date] = None
    account_type: Optional[AccountType] = None
    marital_status: Optional[MaritalStatus] = None
    location: Optional[Location] = None

    @field_validator("username", "password", "salary", "account_type", "marital_status")
    @classmethod
    def _required_fields_not_null(cls, value: Any) -> Any:
        # required on User
        if value is None:
            raise ValueError("field cannot be cleared")
        return value

    def to_set_document(self) -> Dict[str, Any]:
        """Return the ``$set`` body for the fields explicitly provided."""
        document = self.model_dump(by_alias=True, exclude_unset=True, mode="python")
        if "dateOfBirth" in document and document["dateOfBirth"] is not None:
            document["dateOfBirth"] = datetime.combine(document["dateOfBirth"], datetime.min.time())
        return document


class Follow(TuiterBaseModel):
    """Directed edge: ``user_following`` follows ``user_followed``."""

    id: Optional[str] = Field(default=None, alias="_id")
    user_following: str = Field(min_length=1)
    user_followed: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=_utcnow)

    @field_validator("created_at")
    @classmethod
    def _created_at_to_millis(cls, value: datetime) -> datetime:
        return _to_millis(value)


class WriteAcknowledgment(BaseModel):
    """How many documents a mutation touched."""

    model_config = ConfigDict(frozen=True)

    acknowledged: bool = True
    matched_count: int = Field(default=0, ge=0)
    modified_count: int = Field(default=0, ge=0)
    deleted_count: int = Field(default=0, ge=0)

    @classmethod
    def from_update_result(cls, result: Any) -> "WriteAcknowledgment":
        """Build from a pymongo ``UpdateResult``."""
        if not result.acknowledged:
            return cls(acknowledged=False)
        return cls(matched_count=result.matched_count, modified_count=result.modified_count)

    @classmethod
    def from_delete_result(cls, result: Any) -> "WriteAcknowledgment":
        """Build from a pymongo ``DeleteResult``."""
        if not result.acknowledged:
            return cls(acknowledged=False)
        return cls(deleted_count=result.deleted_count)


__all__ = [
    "TuiterBaseModel",
    "Location",
    "User",
    "UserUpdate",
    "Follow",
    "WriteAcknowledgment",
]
