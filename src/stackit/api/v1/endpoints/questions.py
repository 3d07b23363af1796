# src/stackit/api/v1/endpoints/questions.py
"""Question endpoints: listing, detail, asking, answering and voting."""

from fastapi import APIRouter, Query, status

from stackit.core.settings import settings
from stackit.models import Answer, Question
from stackit.schemas.question import (
    AnswerCreate,
    AnswerEnvelope,
    AnswerResponse,
    QuestionCreate,
    QuestionDetail,
    QuestionEnvelope,
    QuestionListItem,
    QuestionListResponse,
    QuestionPagination,
    QuestionSort,
)
from stackit.schemas.user import UserSummary
from stackit.schemas.vote import VoteCreate, VoteResponse
from stackit.services import questions as question_service
from stackit.services.voting import KIND_QUESTION, apply_vote

from ..dependencies import CurrentUserDep, OptionalUserDep, SessionDep

router = APIRouter(prefix="/questions", tags=["questions"])


def answer_payload(answer: Answer, user_vote: str | None = None) -> AnswerResponse:
    """Serialize an answer together with the caller's vote on it."""
    return AnswerResponse.model_validate(answer).model_copy(update={"user_vote": user_vote})


def _list_item(question: Question) -> QuestionListItem:
    return QuestionListItem(
        id=question.id,
        title=question.title,
        description=question_service.preview(question.description),
        tags=question.tags,
        author=UserSummary.model_validate(question.author),
        vote_count=question.vote_count,
        answer_count=question.answer_count,
        created_at=question.created_at,
    )


def _detail(view: question_service.QuestionDetailView) -> QuestionDetail:
    answers = [answer_payload(a, view.answer_votes.get(a.id)) for a in view.answers]
    return QuestionDetail.model_validate(view.question).model_copy(
        update={"answers": answers, "user_vote": view.user_vote}
    )


@router.get("", response_model=QuestionListResponse)
async def list_questions(
    db: SessionDep,
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(
        settings.questions_page_size,
        ge=1,
        le=settings.questions_page_max,
        description="Questions per page",
    ),
    sort: QuestionSort = Query("newest", description="newest, unanswered or votes"),
    tags: str | None = Query(None, description="Comma-separated tag names, any may match"),
    search: str | None = Query(None, max_length=200, description="Title or body substring"),
) -> QuestionListResponse:
    """List live questions with pagination, sorting and filters."""
    tag_list = [tag for tag in tags.split(",") if tag.strip()] if tags else None
    rows, pagination = question_service.list_questions(
        db,
        page=page,
        limit=limit,
        sort=sort,
        tags=tag_list,
        search=search,
    )
    return QuestionListResponse(
        questions=[_list_item(question) for question in rows],
        pagination=QuestionPagination(**pagination),
    )


@router.get("/{question_id}", response_model=QuestionEnvelope)
async def get_question(
    question_id: int,
    db: SessionDep,
    viewer: OptionalUserDep,
) -> QuestionEnvelope:
    """Return a question with its answers; signed-in callers also get their votes."""
    view = question_service.get_question_detail(db, question_id, viewer)
    return QuestionEnvelope(question=_detail(view))


@router.post("", response_model=QuestionEnvelope, status_code=status.HTTP_201_CREATED)
async def create_question(
    payload: QuestionCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> QuestionEnvelope:
    """Ask a new question."""
    question = question_service.create_question(
        db,
        author=current_user,
        title=payload.title,
        description=payload.description,
        tags=payload.tags,
    )
    return QuestionEnvelope(
        message="Question created successfully",
        question=QuestionDetail.model_validate(question),
    )


@router.post(
    "/{question_id}/answers",
    response_model=AnswerEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_answer(
    question_id: int,
    payload: AnswerCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> AnswerEnvelope:
    """Answer a live question."""
    answer = question_service.add_answer(
        db,
        question_id=question_id,
        author=current_user,
        content=payload.content,
    )
    return AnswerEnvelope(message="Answer added successfully", answer=answer_payload(answer))


@router.post("/{question_id}/vote", response_model=VoteResponse)
async def vote_question(
    question_id: int,
    payload: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResponse:
    """Vote on a question; repeating the same vote removes it."""
    result = apply_vote(
        db,
        kind=KIND_QUESTION,
        target_id=question_id,
        voter=current_user,
        direction=payload.type,
    )
    return VoteResponse(vote_count=result.vote_count, user_vote=result.user_vote)
