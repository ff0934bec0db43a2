"""Base classes for every schema, split by direction.

Client-facing models speak camelCase on the wire and accept either case on
input. Stored rows keep their column names.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


_CAMEL_WIRE = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    serialize_by_alias=True,
    use_enum_values=True,
    validate_default=True,
)


class APIRequest(BaseModel):
    """Request bodies; unknown keys are dropped."""

    model_config = ConfigDict(**_CAMEL_WIRE, extra="ignore")


class APIResponse(BaseModel):
    model_config = ConfigDict(**_CAMEL_WIRE, extra="forbid")


class RecordSchema(BaseModel):
    """ORM rows rendered under their column names (``is_published``)."""

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)


class DownstreamRequest(BaseModel):
    """Bodies this service sends to other services."""

    model_config = ConfigDict(**_CAMEL_WIRE, extra="forbid")
