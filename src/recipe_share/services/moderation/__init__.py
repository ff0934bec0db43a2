"""Moderation service package."""

from recipe_share.services.moderation.service import ModerationService
from recipe_share.services.moderation.transitions import (
    DECISIONS,
    STRICT_TRANSITIONS,
    TRANSITIONS,
    apply_transition,
    build_search_text,
    check_transition,
    parse_decision,
)


__all__ = [
    "DECISIONS",
    "STRICT_TRANSITIONS",
    "TRANSITIONS",
    "ModerationService",
    "apply_transition",
    "build_search_text",
    "check_transition",
    "parse_decision",
]
