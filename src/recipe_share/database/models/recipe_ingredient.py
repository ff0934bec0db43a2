"""Recipe ingredient model definition."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_share.database.models.base import Base, BigIntPK


if TYPE_CHECKING:
    from recipe_share.database.models.recipe import Recipe


class RecipeIngredient(Base):
    """One ordered line item of a recipe's ingredient list."""

    __tablename__ = "recipe_ingredients"

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
    ingredient: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    amount: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    unit: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    order_index: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    recipe: Mapped[Recipe] = relationship("Recipe", back_populates="ingredients")
