"""Recipe model definition.

A recipe row plus its exclusively-owned ingredient, instruction and tag rows.
Visibility to general readers is governed by ``moderation_status`` together
with ``is_published``.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    and_,
    func,
)
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_share.database.models.base import Base, str_enum, utc_now
from recipe_share.schemas.enums import Difficulty, ModerationStatus


if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from recipe_share.database.models.recipe_ingredient import RecipeIngredient
    from recipe_share.database.models.recipe_instruction import RecipeInstruction
    from recipe_share.database.models.recipe_tag import RecipeTag
    from recipe_share.database.models.user import User


class Recipe(Base):
    """SQLAlchemy ORM model for the 'recipes' table."""

    __tablename__ = "recipes"
    __table_args__ = (
        CheckConstraint("prep_time_minutes >= 0", name="prep_time_non_negative"),
        CheckConstraint("cook_time_minutes >= 0", name="cook_time_non_negative"),
        CheckConstraint("servings >= 1", name="servings_positive"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    category: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    difficulty: Mapped[Difficulty] = mapped_column(
        str_enum(Difficulty, "difficulty"),
        nullable=False,
    )
    prep_time_minutes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    cook_time_minutes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    servings: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
    )
    image_url: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    moderation_status: Mapped[ModerationStatus] = mapped_column(
        str_enum(ModerationStatus, "moderation_status"),
        nullable=False,
        default=ModerationStatus.PENDING,
        index=True,
    )
    moderation_notes: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    is_published: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
    )
    # Caller id as reported by the auth provider
    moderated_by: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    moderated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    # Lower-cased title/description/category, rebuilt on approval
    search_text: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    rating: Mapped[Decimal] = mapped_column(
        Numeric(3, 2),
        nullable=False,
        default=Decimal("0"),
    )
    review_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    view_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
    )

    author: Mapped[User] = relationship(
        "User",
        back_populates="recipes",
        foreign_keys=[author_id],
        lazy="joined",
    )
    ingredients: Mapped[list[RecipeIngredient]] = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[RecipeIngredient.order_index, RecipeIngredient.id]",
        lazy="selectin",
    )
    instructions: Mapped[list[RecipeInstruction]] = relationship(
        "RecipeInstruction",
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RecipeInstruction.step_number",
        lazy="selectin",
    )
    tags: Mapped[list[RecipeTag]] = relationship(
        "RecipeTag",
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RecipeTag.id",
        lazy="selectin",
    )

    @hybrid_property
    def is_publicly_visible(self) -> bool:
        """Approved AND flagged published. Both columns are checked."""
        return (
            self.moderation_status == ModerationStatus.APPROVED and self.is_published
        )

    @is_publicly_visible.inplace.expression
    @classmethod
    def _is_publicly_visible_expression(cls) -> ColumnElement[bool]:
        return and_(
            cls.moderation_status == ModerationStatus.APPROVED,
            cls.is_published.is_(True),
        )

    @property
    def author_username(self) -> str | None:
        return self.author.username if self.author is not None else None
