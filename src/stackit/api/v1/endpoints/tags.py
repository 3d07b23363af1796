"""Public tag listings."""

from fastapi import APIRouter, Query

from stackit.schemas.tag import PopularTagsResponse, TagListResponse, TagResponse, TagSort
from stackit.services import tags as tag_service

from ..dependencies import SessionDep

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=TagListResponse)
async def list_tags(
    db: SessionDep,
    limit: int = Query(50, ge=1, le=200),
    sort: TagSort = Query("popular"),
) -> TagListResponse:
    """List active tags as plain names and as full records."""
    rows = tag_service.list_tags(db, sort=sort, limit=limit)
    return TagListResponse(
        tags=[tag.name for tag in rows],
        full_tags=[TagResponse.model_validate(tag) for tag in rows],
    )


@router.get("/popular", response_model=PopularTagsResponse)
async def popular_tags(
    db: SessionDep,
    limit: int = Query(20, ge=1, le=100),
) -> PopularTagsResponse:
    """List the most used active tags."""
    rows = tag_service.popular_tags(db, limit=limit)
    return PopularTagsResponse(tags=[TagResponse.model_validate(tag) for tag in rows])
