"""Enumeration types shared by the ORM models and the API schemas."""

from __future__ import annotations

from enum import StrEnum


class ModerationStatus(StrEnum):
    """Review outcome of a submitted recipe."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def publishes(self) -> bool:
        """Value of ``is_published`` that accompanies this status."""
        return self is ModerationStatus.APPROVED


class Difficulty(StrEnum):
    """Recipe difficulty levels."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    @classmethod
    def parse(cls, value: str) -> Difficulty:
        """Case-insensitive lookup, e.g. ``"easy"`` -> ``Difficulty.EASY``."""
        normalized = value.strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        msg = f"Difficulty must be one of: {', '.join(m.value for m in cls)}"
        raise ValueError(msg)


class UserRole(StrEnum):
    """Account roles, lowest privilege first."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"
    OWNER = "owner"


class UserStatus(StrEnum):
    """Account lifecycle states."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    BANNED = "banned"
    PENDING = "pending"
