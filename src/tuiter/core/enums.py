"""Enumerations for user profile attributes."""
from __future__ import annotations

from enum import Enum


def _normalise_token(token: str) -> str:
    """Normalise enumeration tokens for flexible parsing."""
    return "".join(ch for ch in token.upper() if ch.isalnum())


class CaseInsensitiveStrEnum(str, Enum):
    """``Enum`` base that accepts case-insensitive tokens and relaxed separators."""

    def __str__(self) -> str:  # pragma: no cover - simple proxy
        return str(self.value)

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            normalised = _normalise_token(value)
            for member in cls:  # pragma: no branch - bounded iteration
                if normalised == _normalise_token(member.value):
                    return member
        return None


class AccountType(CaseInsensitiveStrEnum):
    PERSONAL = "PERSONAL"
    ACADEMIC = "ACADEMIC"
    PROFESSIONAL = "PROFESSIONAL"


class MaritalStatus(CaseInsensitiveStrEnum):
    MARRIED = "MARRIED"
    SINGLE = "SINGLE"
    WIDOWED = "WIDOWED"


__all__ = ["CaseInsensitiveStrEnum", "AccountType", "MaritalStatus"]
