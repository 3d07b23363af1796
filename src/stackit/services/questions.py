"""Question and answer authoring, listing and detail views."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy import Select, func, select, update
from sqlalchemy.orm import Session

from stackit.core.errors import NotFoundError, ValidationError
from stackit.core.sanitize import sanitize_html
from stackit.models import Answer, Question, QuestionTag, User
from stackit.models.notification import NOTIFICATION_ANSWER
from stackit.services import tags as tag_service
from stackit.services.notifications import notify
from stackit.services.voting import KIND_ANSWER, KIND_QUESTION, user_votes

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 200

_QUESTION_ORDERING = {
    "newest": (Question.created_at.desc(), Question.id.desc()),
    "unanswered": (Question.created_at.desc(), Question.id.desc()),
    "votes": (Question.vote_count.desc(), Question.created_at.desc(), Question.id.desc()),
}


@dataclass
class QuestionDetailView:
    """A live question, its live answers and the viewer's votes on them."""

    question: Question
    answers: list[Answer]
    user_vote: str | None = None
    answer_votes: dict[int, str] = field(default_factory=dict)


def preview(description: str) -> str:
    """Shorten a description for listings."""
    if len(description) <= PREVIEW_LENGTH:
        return description
    return description[:PREVIEW_LENGTH] + "..."


def get_live_question(db: Session, question_id: int) -> Question:
    """Return a question that has not been soft-deleted, or raise NotFoundError."""
    question = db.scalar(
        select(Question).where(Question.id == question_id, Question.is_deleted.is_(False))
    )
    if question is None:
        raise NotFoundError("Question not found")
    return question


def create_question(
    db: Session,
    *,
    author: User,
    title: str,
    description: str,
    tags: Sequence[str],
) -> Question:
    """Create a question, attach its tags and bump the related counters.

    Raises:
        ValidationError: The tags normalize to nothing, a tag name is invalid,
            or the description is empty once sanitized.
    """
    names = tag_service.normalize_tags(tags)
    body = sanitize_html(description).strip()
    if not body:
        raise ValidationError("Description cannot be empty", code="empty_description")

    question = Question(
        title=title.strip(),
        description=body,
        author_id=author.id,
        tag_links=[QuestionTag(name=name, position=index) for index, name in enumerate(names)],
    )
    db.add(question)
    tag_service.record_usage(db, names)
    db.execute(
        update(User)
        .where(User.id == author.id)
        .values(questions_count=User.questions_count + 1)
    )
    db.commit()
    db.refresh(question)

    logger.info("User %s asked question %s with tags %s", author.id, question.id, names)
    return question


def add_answer(db: Session, *, question_id: int, author: User, content: str) -> Answer:
    """Post an answer to a live question and notify the question's author.

    Raises:
        NotFoundError: The question is missing or soft-deleted.
        ValidationError: The content is empty once sanitized.
    """
    question = get_live_question(db, question_id)
    body = sanitize_html(content).strip()
    if not body:
        raise ValidationError("Answer content cannot be empty", code="empty_content")

    answer = Answer(content=body, author_id=author.id, question_id=question.id)
    db.add(answer)
    db.flush()

    db.execute(
        update(Question)
        .where(Question.id == question.id)
        .values(answer_count=Question.answer_count + 1)
    )
    db.execute(
        update(User)
        .where(User.id == author.id)
        .values(answers_count=User.answers_count + 1)
    )
    notify(
        db,
        recipient_id=question.author_id,
        sender=author,
        type=NOTIFICATION_ANSWER,
        message=f'{author.username} answered your question "{question.title}"',
        question_id=question.id,
        answer_id=answer.id,
    )
    db.commit()
    db.refresh(answer)

    logger.info("User %s answered question %s (answer %s)", author.id, question.id, answer.id)
    return answer


def _filtered(
    stmt: Select,
    *,
    sort: str,
    tags: Sequence[str] | None,
    search: str | None,
) -> Select:
    stmt = stmt.where(Question.is_deleted.is_(False))
    if sort == "unanswered":
        stmt = stmt.where(Question.answer_count == 0)
    wanted = [tag.strip().lower() for tag in tags or () if tag.strip()]
    if wanted:
        stmt = stmt.where(
            Question.id.in_(select(QuestionTag.question_id).where(QuestionTag.name.in_(wanted)))
        )
    if search and search.strip():
        term = search.strip()
        stmt = stmt.where(
            Question.title.icontains(term, autoescape=True)
            | Question.description.icontains(term, autoescape=True)
        )
    return stmt


def list_questions(
    db: Session,
    *,
    page: int = 1,
    limit: int = 10,
    sort: str = "newest",
    tags: Sequence[str] | None = None,
    search: str | None = None,
) -> tuple[list[Question], dict[str, int | bool]]:
    """Return one page of live questions and its pagination metadata."""
    ordering = _QUESTION_ORDERING.get(sort, _QUESTION_ORDERING["newest"])
    rows = db.scalars(
        _filtered(select(Question), sort=sort, tags=tags, search=search)
        .order_by(*ordering)
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()
    total = db.scalar(
        _filtered(select(func.count(Question.id)), sort=sort, tags=tags, search=search)
    ) or 0

    total_pages = math.ceil(total / limit) if limit else 0
    pagination = {
        "page": page,
        "total_pages": total_pages,
        "total_questions": total,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }
    return list(rows), pagination


def get_question_detail(
    db: Session,
    question_id: int,
    viewer: User | None = None,
) -> QuestionDetailView:
    """Load a live question with its answers and count the view.

    Answers come accepted first, then by score, then oldest first. When a
    viewer is given, their vote on the question and on each answer is included.
    """
    question = get_live_question(db, question_id)
    db.execute(
        update(Question)
        .where(Question.id == question.id)
        .values(view_count=Question.view_count + 1)
    )
    db.commit()

    answers = list(
        db.scalars(
            select(Answer)
            .where(Answer.question_id == question.id, Answer.is_deleted.is_(False))
            .order_by(
                Answer.is_accepted.desc(),
                Answer.vote_count.desc(),
                Answer.created_at.asc(),
                Answer.id.asc(),
            )
        )
    )
    view = QuestionDetailView(question=question, answers=answers)
    if viewer is not None:
        view.user_vote = user_votes(db, KIND_QUESTION, [question.id], viewer.id).get(question.id)
        view.answer_votes = user_votes(db, KIND_ANSWER, [a.id for a in answers], viewer.id)
    return view
