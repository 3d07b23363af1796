"""Tag schemas."""

from typing import Literal

from pydantic import Field, field_validator

from .common import APIModel

TagSort = Literal["popular", "alphabetical", "newest"]


class TagCreate(APIModel):
    """Admin payload for creating a tag."""

    name: str = Field(..., min_length=2, max_length=30, pattern=r"^[A-Za-z0-9-]+$")
    description: str = Field("", max_length=200)
    color: str | None = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")

    @field_validator("name")
    @classmethod
    def lowercase_name(cls, v: str) -> str:
        """Tag names are stored lowercased."""
        return v.lower()


class TagResponse(APIModel):
    """Full tag record."""

    id: int
    name: str
    description: str
    question_count: int
    color: str
    is_active: bool


class TagListResponse(APIModel):
    """Tag names plus the full records."""

    success: bool = True
    tags: list[str]
    full_tags: list[TagResponse]


class PopularTagsResponse(APIModel):
    """Tags in use, most used first."""

    success: bool = True
    tags: list[TagResponse]


class TagEnvelope(APIModel):
    """Wrapper for a single tag."""

    success: bool = True
    message: str
    tag: TagResponse
