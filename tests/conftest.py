# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-the-stackit-suite")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from stackit.core.security import create_access_token, hash_password  # noqa: E402
from stackit.db.session import Base  # noqa: E402
from stackit.db.session import get_db as app_get_session  # noqa: E402
from stackit.main import app as fastapi_app  # noqa: E402
from stackit.models import Answer, Question, QuestionTag, User  # noqa: E402
from stackit.models.user import ROLE_ADMIN  # noqa: E402

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "s3cret-pass"

_USER_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    # Services commit their own work, so every test runs against real commits
    # and the tables are emptied afterwards.
    SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        try:
            yield db_session
        except Exception:
            db_session.rollback()
            raise

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test", raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Factory creating committed users with a known password."""

    def _make_user(username: str | None = None, **fields) -> User:
        number = next(_USER_COUNTER)
        username = username or f"user{number}"
        user = User(
            username=username,
            email=fields.pop("email", f"{username.lower()}@example.com"),
            password_hash=hash_password(fields.pop("password", TEST_PASSWORD)),
            **fields,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def author(make_user: Callable[..., User]) -> User:
    return make_user("asker")


@pytest.fixture()
def voter(make_user: Callable[..., User]) -> User:
    return make_user("voter")


@pytest.fixture()
def answerer(make_user: Callable[..., User]) -> User:
    return make_user("answerer")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user("moderator", role=ROLE_ADMIN)


def bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Build an Authorization header for any user."""
    return bearer


@pytest.fixture()
def author_headers(author: User) -> dict[str, str]:
    return bearer(author)


@pytest.fixture()
def voter_headers(voter: User) -> dict[str, str]:
    return bearer(voter)


@pytest.fixture()
def admin_headers(admin_user: User) -> dict[str, str]:
    return bearer(admin_user)


@pytest.fixture()
def make_question(db_session: Session) -> Callable[..., Question]:
    """Factory inserting questions directly, bypassing the service counters."""

    def _make_question(
        owner: User,
        *,
        title: str = "How do I test a vote ledger?",
        tags: tuple[str, ...] = ("python",),
    ) -> Question:
        question = Question(
            title=title,
            description="<p>A question body long enough to be valid.</p>",
            author_id=owner.id,
            tag_links=[QuestionTag(name=name, position=i) for i, name in enumerate(tags)],
        )
        db_session.add(question)
        db_session.commit()
        db_session.refresh(question)
        return question

    return _make_question


@pytest.fixture()
def make_answer(db_session: Session) -> Callable[..., Answer]:
    """Factory inserting answers directly."""

    def _make_answer(
        question: Question,
        owner: User,
        content: str = "<p>Try the ledger.</p>",
    ) -> Answer:
        answer = Answer(content=content, author_id=owner.id, question_id=question.id)
        db_session.add(answer)
        db_session.commit()
        db_session.refresh(answer)
        return answer

    return _make_answer


@pytest.fixture()
def question(make_question: Callable[..., Question], author: User) -> Question:
    return make_question(author)


@pytest.fixture()
def answer(make_answer: Callable[..., Answer], question: Question, answerer: User) -> Answer:
    return make_answer(question, answerer)
