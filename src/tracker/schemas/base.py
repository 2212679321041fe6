"""Shared schema base: camelCase on the wire, snake_case in Python."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    message: str


def strip_or_none(v: str | None) -> str | None:
    """Trim whitespace; blank optional strings become None."""
    if v is None:
        return None
    v = v.strip()
    return v or None
