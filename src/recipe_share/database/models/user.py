"""User model definition.

Users author recipes and, with an elevated role, moderate them.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_share.database.models.base import Base, str_enum, utc_now
from recipe_share.schemas.enums import UserRole, UserStatus


if TYPE_CHECKING:
    from recipe_share.database.models.recipe import Recipe


class User(Base):
    """SQLAlchemy ORM model for the 'users' table."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    password_hash: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    avatar: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    provider: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="email",
    )
    role: Mapped[UserRole] = mapped_column(
        str_enum(UserRole, "user_role"),
        nullable=False,
        default=UserRole.USER,
    )
    status: Mapped[UserStatus] = mapped_column(
        str_enum(UserStatus, "user_status"),
        nullable=False,
        default=UserStatus.ACTIVE,
    )
    is_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    last_login: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
    )

    recipes: Mapped[list[Recipe]] = relationship(
        "Recipe",
        back_populates="author",
        foreign_keys="Recipe.author_id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
