"""Declarative base and column helpers shared by all ORM models."""

from __future__ import annotations

import enum
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import BigInteger, Integer, MetaData
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import DeclarativeBase


# Deterministic constraint names so migrations and SQLite/Postgres agree
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# BIGINT on Postgres; SQLite only autoincrements an INTEGER primary key
BigIntPK = BigInteger().with_variant(Integer, "sqlite")


def utc_now() -> datetime:
    """Timezone-aware current time used for Python-side column defaults."""
    return datetime.now(UTC)


def str_enum(enum_cls: type[enum.Enum], name: str) -> SAEnum:
    """Store a StrEnum by value in a VARCHAR column."""
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        length=20,
        values_callable=lambda members: [m.value for m in members],
    )


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    def __repr__(self) -> str:
        columns: dict[str, Any] = {
            column.key: getattr(self, column.key, None)
            for column in self.__table__.columns
            if column.key in self.__dict__
        }
        fields = ", ".join(f"{k}={v!r}" for k, v in columns.items())
        return f"{type(self).__name__}({fields})"
