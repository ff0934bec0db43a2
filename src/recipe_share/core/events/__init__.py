"""Application lifecycle events."""

from recipe_share.core.events.lifespan import lifespan


__all__ = ["lifespan"]
