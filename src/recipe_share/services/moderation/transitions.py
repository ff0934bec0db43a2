"""Moderation state machine.

``pending`` is entered only at creation. A decision moves a recipe to
``approved`` or ``rejected``. By default a decided recipe may be decided
again (corrections); strict mode allows decisions on pending recipes only.

``apply_transition`` is the only writer of the moderation columns, so
``is_published`` always equals ``status.publishes`` after it runs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from recipe_share.core.exceptions import ErrorDetail, ValidationError
from recipe_share.schemas.enums import ModerationStatus


if TYPE_CHECKING:
    from datetime import datetime

    from recipe_share.database.models import Recipe


DECISIONS: Final[frozenset[ModerationStatus]] = frozenset(
    {ModerationStatus.APPROVED, ModerationStatus.REJECTED}
)

TRANSITIONS: Final[dict[ModerationStatus, frozenset[ModerationStatus]]] = {
    ModerationStatus.PENDING: DECISIONS,
    ModerationStatus.APPROVED: DECISIONS,
    ModerationStatus.REJECTED: DECISIONS,
}

STRICT_TRANSITIONS: Final[dict[ModerationStatus, frozenset[ModerationStatus]]] = {
    ModerationStatus.PENDING: DECISIONS,
    ModerationStatus.APPROVED: frozenset(),
    ModerationStatus.REJECTED: frozenset(),
}


def parse_decision(value: str | None) -> ModerationStatus:
    """Accept exactly ``approved`` or ``rejected``.

    Raises:
        ValidationError: For a missing value or any other string.
    """
    if not value:
        msg = "Recipe ID and status are required"
        raise ValidationError(
            msg,
            details=[
                ErrorDetail(code="MISSING", message="Field required", field="status")
            ],
        )
    if value not in {d.value for d in DECISIONS}:
        msg = "Status must be 'approved' or 'rejected'"
        raise ValidationError(
            msg,
            details=[ErrorDetail(code="INVALID", message=msg, field="status")],
        )
    return ModerationStatus(value)


def check_transition(
    current: ModerationStatus,
    target: ModerationStatus,
    *,
    strict: bool = False,
) -> None:
    """Raise ``ValidationError`` if ``current -> target`` is not in the table."""
    table = STRICT_TRANSITIONS if strict else TRANSITIONS
    if target not in table[current]:
        msg = f"Cannot move a recipe from '{current}' to '{target}'"
        raise ValidationError(msg)


def build_search_text(title: str, description: str | None, category: str) -> str:
    """Whitespace-normalized, lower-cased title, description and category."""
    parts = (title, description or "", category)
    return " ".join(" ".join(parts).lower().split())


def apply_transition(
    recipe: Recipe,
    target: ModerationStatus,
    *,
    notes: str | None,
    moderator_id: str | None,
    now: datetime,
) -> None:
    """Write status, publish flag, notes and audit fields in one step."""
    recipe.moderation_status = target
    recipe.is_published = target.publishes
    recipe.moderation_notes = notes or None
    recipe.moderated_by = moderator_id
    recipe.moderated_at = now
    recipe.updated_at = now
    if target is ModerationStatus.APPROVED:
        recipe.search_text = build_search_text(
            recipe.title, recipe.description, recipe.category
        )
