from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AuthResult(BaseModel):
    """Who is calling, as established by a provider.

    ``token_type`` is ``access`` for bearer tokens, ``header`` for gateway
    identity and ``none`` when auth is disabled. ``raw_claims`` keeps the
    decoded token (or a marker for tokenless modes) for auditing.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    roles: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)
    token_type: str = "access"
    expires_at: int | None = None  # unix seconds
    raw_claims: dict[str, Any] = Field(default_factory=dict)
