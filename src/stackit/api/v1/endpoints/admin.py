# src/stackit/api/v1/endpoints/admin.py
"""Administrator endpoints for moderation and tag curation."""

from fastapi import APIRouter, Query, status

from stackit.core.settings import settings
from stackit.schemas.admin import (
    AdminQuestionItem,
    AdminQuestionListResponse,
    AdminQuestionPagination,
    AdminUserListResponse,
    AdminUserPagination,
    AdminUserStatusResponse,
    UserStatusUpdate,
)
from stackit.schemas.common import MessageResponse
from stackit.schemas.tag import TagCreate, TagEnvelope, TagResponse
from stackit.schemas.user import UserResponse
from stackit.services import moderation

from ..dependencies import AdminDep, SessionDep

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=AdminUserListResponse)
async def list_users(
    admin: AdminDep,
    db: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.admin_page_size, ge=1, le=settings.admin_page_max),
    search: str | None = Query(None, max_length=100),
) -> AdminUserListResponse:
    """List every account, optionally filtered by username or email."""
    rows, pagination = moderation.list_users(db, page=page, limit=limit, search=search)
    return AdminUserListResponse(
        users=[UserResponse.model_validate(user) for user in rows],
        pagination=AdminUserPagination(**pagination),
    )


@router.patch("/users/{user_id}/status", response_model=AdminUserStatusResponse)
async def update_user_status(
    user_id: int,
    payload: UserStatusUpdate,
    admin: AdminDep,
    db: SessionDep,
) -> AdminUserStatusResponse:
    """Block or unblock an account."""
    user = moderation.set_user_status(db, user_id, payload.status, admin)
    verb = "blocked" if user.is_blocked else "unblocked"
    return AdminUserStatusResponse(
        message=f"User {verb} successfully",
        user=UserResponse.model_validate(user),
    )


@router.get("/questions", response_model=AdminQuestionListResponse)
async def list_questions(
    admin: AdminDep,
    db: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.admin_page_size, ge=1, le=settings.admin_page_max),
    include_deleted: bool = Query(False, alias="includeDeleted"),
) -> AdminQuestionListResponse:
    """List questions, including soft-deleted ones when requested."""
    rows, pagination = moderation.list_questions(
        db, page=page, limit=limit, include_deleted=include_deleted
    )
    return AdminQuestionListResponse(
        questions=[AdminQuestionItem.model_validate(question) for question in rows],
        pagination=AdminQuestionPagination(**pagination),
    )


@router.delete("/questions/{question_id}", response_model=MessageResponse)
async def delete_question(question_id: int, admin: AdminDep, db: SessionDep) -> MessageResponse:
    """Soft-delete a question."""
    moderation.soft_delete_question(db, question_id, admin)
    return MessageResponse(message="Question deleted successfully")


@router.delete("/answers/{answer_id}", response_model=MessageResponse)
async def delete_answer(answer_id: int, admin: AdminDep, db: SessionDep) -> MessageResponse:
    """Soft-delete an answer."""
    moderation.soft_delete_answer(db, answer_id, admin)
    return MessageResponse(message="Answer deleted successfully")


@router.post("/tags", response_model=TagEnvelope, status_code=status.HTTP_201_CREATED)
async def create_tag(payload: TagCreate, admin: AdminDep, db: SessionDep) -> TagEnvelope:
    """Create a curated tag."""
    tag = moderation.create_tag(
        db,
        name=payload.name,
        description=payload.description,
        color=payload.color,
        actor=admin,
    )
    return TagEnvelope(message="Tag created successfully", tag=TagResponse.model_validate(tag))


@router.delete("/tags/{tag_id}", response_model=MessageResponse)
async def deactivate_tag(tag_id: int, admin: AdminDep, db: SessionDep) -> MessageResponse:
    """Hide a tag from listings."""
    moderation.deactivate_tag(db, tag_id, admin)
    return MessageResponse(message="Tag deactivated successfully")
