"""Recipe tag model definition."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_share.database.models.base import Base, BigIntPK


if TYPE_CHECKING:
    from recipe_share.database.models.recipe import Recipe


class RecipeTag(Base):
    """Free-form label on a recipe. Uniqueness is not enforced by storage."""

    __tablename__ = "recipe_tags"

    id: Mapped[int] = mapped_column(
        BigIntPK,
        primary_key=True,
        autoincrement=True,
    )
    recipe_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("recipes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tag: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    recipe: Mapped[Recipe] = relationship("Recipe", back_populates="tags")
