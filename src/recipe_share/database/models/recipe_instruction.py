"""Recipe instruction model definition."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_share.database.models.base import Base, BigIntPK


if TYPE_CHECKING:
    from recipe_share.database.models.recipe import Recipe


class RecipeInstruction(Base):
    """One numbered step of a recipe. Step numbers are unique per recipe."""

    __tablename__ = "recipe_instructions"
    __table_args__ = (UniqueConstraint("recipe_id", "step_number"),)

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
    instruction: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    step_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    recipe: Mapped[Recipe] = relationship("Recipe", back_populates="instructions")
