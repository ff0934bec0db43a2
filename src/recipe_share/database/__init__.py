"""Relational store: engine lifecycle, ORM models and repositories."""

from recipe_share.database.connection import (
    check_database_health,
    close_database,
    get_engine,
    get_session_factory,
    init_database,
)


__all__ = [
    "check_database_health",
    "close_database",
    "get_engine",
    "get_session_factory",
    "init_database",
]
