# tests/services/test_moderation_service.py
"""Service-level tests for administrator moderation."""

from __future__ import annotations

import pytest
from sqlalchemy import select

from stackit.core.errors import ConflictError, NotFoundError, ValidationError
from stackit.models import Tag
from stackit.services import moderation
from stackit.services import questions as question_service
from stackit.services.acceptance import toggle_acceptance

BODY = "<p>This description is comfortably longer than twenty characters.</p>"


def test_soft_delete_question_releases_tags(db_session, author, admin_user) -> None:
    question = question_service.create_question(
        db_session, author=author, title="Question about tag counts", description=BODY,
        tags=["python", "sql"],
    )
    question_service.create_question(
        db_session, author=author, title="Second question about tags", description=BODY,
        tags=["python"],
    )

    moderation.soft_delete_question(db_session, question.id, admin_user)

    db_session.refresh(question)
    assert question.is_deleted is True
    assert question.deleted_by_id == admin_user.id
    assert question.deleted_at is not None
    db_session.expire_all()
    counts = {tag.name: tag.question_count for tag in db_session.scalars(select(Tag))}
    assert counts == {"python": 1, "sql": 0}


def test_soft_delete_question_twice_is_rejected(db_session, question, admin_user) -> None:
    moderation.soft_delete_question(db_session, question.id, admin_user)

    with pytest.raises(ValidationError, match="Question is already deleted"):
        moderation.soft_delete_question(db_session, question.id, admin_user)


def test_soft_delete_missing_question(db_session, admin_user) -> None:
    with pytest.raises(NotFoundError):
        moderation.soft_delete_question(db_session, 4242, admin_user)


def test_soft_delete_accepted_answer_clears_acceptance(
    db_session, question, answer, author, answerer, admin_user
) -> None:
    question.answer_count = 1
    db_session.commit()
    toggle_acceptance(db_session, answer_id=answer.id, caller=author)
    db_session.refresh(answerer)
    assert answerer.reputation == 15

    moderation.soft_delete_answer(db_session, answer.id, admin_user)

    for obj in (question, answer, answerer):
        db_session.refresh(obj)
    assert answer.is_deleted is True
    assert answer.is_accepted is False
    assert question.accepted_answer_id is None
    assert question.answer_count == 0
    assert answerer.reputation == 0


def test_soft_delete_plain_answer_keeps_reputation(
    db_session, question, answer, answerer, admin_user
) -> None:
    moderation.soft_delete_answer(db_session, answer.id, admin_user)

    db_session.refresh(question)
    db_session.refresh(answerer)
    # Counter never drops below zero even if it was never incremented.
    assert question.answer_count == 0
    assert answerer.reputation == 0

    with pytest.raises(ValidationError, match="Answer is already deleted"):
        moderation.soft_delete_answer(db_session, answer.id, admin_user)


def test_block_and_unblock_user(db_session, voter, admin_user) -> None:
    user = moderation.set_user_status(db_session, voter.id, "blocked", admin_user)
    assert user.is_blocked

    user = moderation.set_user_status(db_session, voter.id, "active", admin_user)
    assert not user.is_blocked


def test_cannot_block_admin(db_session, make_user, admin_user) -> None:
    other_admin = make_user("other_admin", role="admin")
    with pytest.raises(ValidationError, match="Cannot block admin users"):
        moderation.set_user_status(db_session, other_admin.id, "blocked", admin_user)


def test_cannot_change_own_status(db_session, admin_user) -> None:
    with pytest.raises(ValidationError, match="Cannot change your own status"):
        moderation.set_user_status(db_session, admin_user.id, "active", admin_user)


def test_set_status_of_unknown_user(db_session, admin_user) -> None:
    with pytest.raises(NotFoundError, match="User not found"):
        moderation.set_user_status(db_session, 9999, "blocked", admin_user)


def test_create_and_deactivate_tag(db_session, admin_user) -> None:
    tag = moderation.create_tag(
        db_session, name="FastAPI", description="Web framework", actor=admin_user
    )
    assert tag.name == "fastapi"
    assert tag.color == "#3B82F6"
    assert tag.created_by_id == admin_user.id

    with pytest.raises(ConflictError, match="Tag already exists"):
        moderation.create_tag(db_session, name="fastapi", actor=admin_user)

    moderation.deactivate_tag(db_session, tag.id, admin_user)
    db_session.refresh(tag)
    assert tag.is_active is False

    with pytest.raises(NotFoundError):
        moderation.deactivate_tag(db_session, 777, admin_user)


def test_list_users_search(db_session, make_user, admin_user) -> None:
    make_user("alice")
    make_user("bob", email="bob@elsewhere.org")

    rows, pagination = moderation.list_users(db_session, search="ELSEWHERE")
    assert [user.username for user in rows] == ["bob"]
    assert pagination["total_users"] == 1


def test_list_questions_include_deleted(db_session, make_question, author, admin_user) -> None:
    live = make_question(author, title="Live question title here")
    gone = make_question(author, title="Gone question title here")
    moderation.soft_delete_question(db_session, gone.id, admin_user)

    rows, _ = moderation.list_questions(db_session)
    assert [q.id for q in rows] == [live.id]

    rows, pagination = moderation.list_questions(db_session, include_deleted=True)
    assert {q.id for q in rows} == {live.id, gone.id}
    assert pagination["total_questions"] == 2
