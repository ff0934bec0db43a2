"""Moderation service.

Applies moderator decisions to recipes and serves the pending queue. The
status change, publish flag, notes and search text are written in one
transaction; the author notification runs afterwards and cannot undo it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from recipe_share.core.exceptions import NotFoundError, SideEffectError, StorageError
from recipe_share.database.models.base import utc_now
from recipe_share.database.repositories import RecipeRepository
from recipe_share.observability.logging import get_logger
from recipe_share.observability.metrics import (
    MODERATION_DECISIONS,
    NOTIFICATION_FAILURES,
)
from recipe_share.schemas.enums import ModerationStatus
from recipe_share.schemas.notification import RecipeModeratedNotification
from recipe_share.schemas.recipe import RecipeRecord
from recipe_share.services.moderation.transitions import (
    apply_transition,
    check_transition,
    parse_decision,
)


if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from recipe_share.clients.notifications import NotificationClient

logger = get_logger(__name__)


class ModerationService:
    """Moderation decisions and the pending queue."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        notifier: NotificationClient | None = None,
        *,
        strict_transitions: bool = False,
    ) -> None:
        self._session_factory = session_factory
        self._notifier = notifier
        self._strict = strict_transitions

    async def list_pending(self) -> list[RecipeRecord]:
        """Recipes awaiting a decision, longest-waiting first."""
        try:
            async with self._session_factory() as session:
                recipes = await RecipeRepository(session).list_pending()
                return [RecipeRecord.model_validate(r) for r in recipes]
        except SQLAlchemyError as e:
            msg = "Failed to fetch pending recipes"
            raise StorageError(msg, details=str(e)) from e

    async def moderate(
        self,
        recipe_id: uuid.UUID,
        status: str | None,
        *,
        notes: str | None = None,
        moderator_id: str | None = None,
    ) -> RecipeRecord:
        """Apply a decision and return the re-read recipe.

        Raises:
            ValidationError: ``status`` is not ``approved``/``rejected``, or the
                transition is refused in strict mode. Nothing is written.
            NotFoundError: The recipe does not exist, or vanished before it
                could be re-read.
            StorageError: The transaction failed and was rolled back.
        """
        target = parse_decision(status)

        try:
            async with self._session_factory() as session:
                repository = RecipeRepository(session)

                async with session.begin():
                    recipe = await repository.get(recipe_id)
                    if recipe is None:
                        raise NotFoundError("Recipe", recipe_id)
                    previous = recipe.moderation_status
                    check_transition(previous, target, strict=self._strict)
                    apply_transition(
                        recipe,
                        target,
                        notes=notes,
                        moderator_id=moderator_id,
                        now=utc_now(),
                    )

                updated = await repository.get(recipe_id, refresh=True)
                if updated is None:
                    logger.warning(
                        "Recipe vanished after moderation", recipe_id=str(recipe_id)
                    )
                    raise NotFoundError("Recipe", recipe_id)
                record = RecipeRecord.model_validate(updated)
        except SQLAlchemyError as e:
            logger.error(
                "Moderation rolled back", recipe_id=str(recipe_id), error=str(e)
            )
            msg = "Failed to moderate recipe"
            raise StorageError(msg, details=str(e)) from e

        MODERATION_DECISIONS.labels(status=target.value).inc()
        logger.info(
            "Recipe moderated",
            recipe_id=str(recipe_id),
            previous_status=previous.value,
            status=target.value,
            moderator_id=moderator_id,
        )

        if target is ModerationStatus.APPROVED:
            await self._notify(record)
        return record

    async def _notify(self, record: RecipeRecord) -> None:
        """Best-effort author notification. Failures are logged and counted."""
        if self._notifier is None:
            return
        try:
            await self._notifier.send_recipe_moderated(
                RecipeModeratedNotification(
                    recipe_id=record.id,
                    title=record.title,
                    status=record.moderation_status,
                    author_id=record.author_id,
                )
            )
        except SideEffectError as e:
            NOTIFICATION_FAILURES.inc()
            logger.warning(
                "Moderation notification failed",
                recipe_id=str(record.id),
                error=e.message,
                details=e.details,
            )
