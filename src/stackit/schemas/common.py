"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base schema serializing with camelCase keys.

    Request bodies accept either camelCase or snake_case field names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Pagination(APIModel):
    """Page metadata returned by paginated list endpoints."""

    page: int
    total_pages: int
    has_next: bool
    has_prev: bool


class MessageResponse(APIModel):
    """Acknowledgement with a human-readable message."""

    success: bool = True
    message: str
