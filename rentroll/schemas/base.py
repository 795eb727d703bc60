"""Shared Pydantic configuration for request/response schemas."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class Envelope(CamelModel, Generic[T]):
    """Success envelope used by the property endpoints."""

    success: bool = True
    data: T


class ListEnvelope(CamelModel, Generic[T]):
    """Success envelope for collections."""

    success: bool = True
    count: int
    data: list[T]


class MessageEnvelope(CamelModel):
    """Success envelope carrying only a message."""

    success: bool = True
    message: str
