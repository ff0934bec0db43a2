"""Turn a raw submission into ORM rows, or reject it.

Top-level fields are strict: anything missing or out of range raises
``ValidationError``. Child rows are lenient: malformed ingredient,
instruction and tag entries are dropped without comment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from recipe_share.core.exceptions import ErrorDetail, ValidationError
from recipe_share.database.models import (
    Recipe,
    RecipeIngredient,
    RecipeInstruction,
    RecipeTag,
)
from recipe_share.schemas.enums import Difficulty, ModerationStatus
from recipe_share.services.submission.constants import (
    DEFAULT_COOK_TIME_MINUTES,
    DEFAULT_PREP_TIME_MINUTES,
    DEFAULT_SERVINGS,
    MAX_AMOUNT_LENGTH,
    MAX_CATEGORY_LENGTH,
    MAX_INGREDIENT_LENGTH,
    MAX_TAG_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_UNIT_LENGTH,
)


if TYPE_CHECKING:
    import uuid

    from recipe_share.schemas.recipe import (
        IngredientInput,
        InstructionInput,
        RecipeSubmission,
    )


REQUIRED_FIELDS = ("title", "category", "difficulty")


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _check_length(value: str, limit: int, field: str) -> None:
    if len(value) > limit:
        raise ValidationError(
            f"{field} must be at most {limit} characters",
            details=[
                ErrorDetail(
                    code="TOO_LONG", message=f"Max {limit} characters", field=field
                )
            ],
        )


def _at_least(value: int | None, default: int, field: str, minimum: int) -> int:
    if value is None:
        return default
    if value < minimum:
        raise ValidationError(
            f"{field} must be at least {minimum}",
            details=[
                ErrorDetail(code="OUT_OF_RANGE", message=f"Min {minimum}", field=field)
            ],
        )
    return value


def keep_ingredients(rows: list[IngredientInput]) -> list[RecipeIngredient]:
    """Ingredients with name, amount and unit all present, in submitted order."""
    kept: list[RecipeIngredient] = []
    for row in rows:
        ingredient = _clean(row.ingredient)
        amount = _clean(row.amount)
        unit = _clean(row.unit)
        if not (ingredient and amount and unit):
            continue
        _check_length(ingredient, MAX_INGREDIENT_LENGTH, "ingredient")
        _check_length(amount, MAX_AMOUNT_LENGTH, "amount")
        _check_length(unit, MAX_UNIT_LENGTH, "unit")
        kept.append(
            RecipeIngredient(
                ingredient=ingredient,
                amount=amount,
                unit=unit,
                order_index=len(kept),
            )
        )
    return kept


def keep_instructions(rows: list[InstructionInput]) -> list[RecipeInstruction]:
    """Instructions with text and a 1-based step number.

    Raises:
        ValidationError: If two kept rows share a step number.
    """
    kept: list[RecipeInstruction] = []
    seen: set[int] = set()
    for row in rows:
        text = _clean(row.instruction)
        if not text or row.step_number is None or row.step_number < 1:
            continue
        if row.step_number in seen:
            raise ValidationError(
                f"Duplicate step number: {row.step_number}",
                details=[
                    ErrorDetail(
                        code="DUPLICATE",
                        message="Step numbers must be unique",
                        field="instructions.step_number",
                    )
                ],
            )
        seen.add(row.step_number)
        kept.append(RecipeInstruction(instruction=text, step_number=row.step_number))
    return kept


def keep_tags(values: list[Any]) -> list[RecipeTag]:
    """Non-empty string tags, trimmed, first occurrence wins."""
    kept: dict[str, RecipeTag] = {}
    for value in values:
        if not isinstance(value, str):
            continue
        tag = value.strip()
        if not tag or tag in kept:
            continue
        _check_length(tag, MAX_TAG_LENGTH, "tags")
        kept[tag] = RecipeTag(tag=tag)
    return list(kept.values())


def build_recipe(
    recipe_id: uuid.UUID,
    author_id: uuid.UUID,
    submission: RecipeSubmission,
) -> Recipe:
    """Validate a submission and assemble the pending recipe with its children.

    Raises:
        ValidationError: On a missing required field, an unknown difficulty,
            an out-of-range number or a duplicate step number.
    """
    title = _clean(submission.title)
    category = _clean(submission.category)
    difficulty_raw = _clean(submission.difficulty)

    if title is None or category is None or difficulty_raw is None:
        values = (title, category, difficulty_raw)
        missing = [
            name
            for name, value in zip(REQUIRED_FIELDS, values, strict=True)
            if value is None
        ]
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            details=[
                ErrorDetail(code="MISSING", message="Field required", field=name)
                for name in missing
            ],
        )

    _check_length(title, MAX_TITLE_LENGTH, "title")
    _check_length(category, MAX_CATEGORY_LENGTH, "category")

    try:
        difficulty = Difficulty.parse(difficulty_raw)
    except ValueError as e:
        raise ValidationError(
            str(e),
            details=[ErrorDetail(code="INVALID", message=str(e), field="difficulty")],
        ) from e

    status = ModerationStatus.PENDING
    return Recipe(
        id=recipe_id,
        author_id=author_id,
        title=title,
        description=_clean(submission.description),
        category=category,
        difficulty=difficulty,
        prep_time_minutes=_at_least(
            submission.prep_time_minutes,
            DEFAULT_PREP_TIME_MINUTES,
            "prep_time_minutes",
            0,
        ),
        cook_time_minutes=_at_least(
            submission.cook_time_minutes,
            DEFAULT_COOK_TIME_MINUTES,
            "cook_time_minutes",
            0,
        ),
        servings=_at_least(submission.servings, DEFAULT_SERVINGS, "servings", 1),
        image_url=_clean(submission.image_url),
        moderation_status=status,
        is_published=status.publishes,
        ingredients=keep_ingredients(submission.ingredients),
        instructions=keep_instructions(submission.instructions),
        tags=keep_tags(submission.tags),
    )
