"""Common Pydantic schemas used across the application."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelSchema(BaseModel):
    """Base schema exposing camelCase keys on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str


class ErrorResponse(BaseModel):
    """Standard error response."""

    message: str
    error: str | None = None
