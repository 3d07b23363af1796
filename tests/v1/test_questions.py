# tests/v1/test_questions.py
"""Tests for question and answer endpoints."""

from __future__ import annotations

from fastapi import status

BODY = "<p>This description is comfortably longer than twenty characters.</p>"


def _ask(client, headers, **overrides):
    payload = {"title": "How do I keep counters consistent?", "description": BODY, "tags": ["sql"]}
    payload.update(overrides)
    return client.post("/api/questions", json=payload, headers=headers)


def test_create_question(client, author, author_headers) -> None:
    response = _ask(client, author_headers, tags=["SQL", "python", "sql"])

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["message"] == "Question created successfully"
    question = body["question"]
    assert question["tags"] == ["sql", "python"]
    assert question["author"]["username"] == "asker"
    assert question["voteCount"] == 0
    assert question["acceptedAnswerId"] is None


def test_create_question_requires_auth(client) -> None:
    response = _ask(client, {})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_create_question_validation(client, author_headers) -> None:
    response = _ask(client, author_headers, title="too short", tags=[])

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    fields = {error["field"] for error in response.json()["errors"]}
    assert {"title", "tags"} <= fields


def test_create_question_with_only_blank_tags(client, author_headers) -> None:
    response = _ask(client, author_headers, tags=["  ", ""])

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "At least one valid tag is required"


def test_list_questions_truncates_descriptions(client, author_headers) -> None:
    long_body = "<p>" + "ledger " * 60 + "</p>"
    _ask(client, author_headers, description=long_body)

    response = client.get("/api/questions")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["pagination"]["totalQuestions"] == 1
    assert body["pagination"]["hasNext"] is False
    description = body["questions"][0]["description"]
    assert description.endswith("...")
    assert len(description) == 203


def test_list_questions_rejects_bad_sort_and_limit(client) -> None:
    assert client.get("/api/questions?sort=random").status_code == status.HTTP_400_BAD_REQUEST
    assert client.get("/api/questions?limit=51").status_code == status.HTTP_400_BAD_REQUEST


def test_list_questions_by_tags(client, make_question, author) -> None:
    wanted = make_question(author, title="A question about rust", tags=("rust",))
    make_question(author, title="A question about golang", tags=("go",))

    response = client.get("/api/questions", params={"tags": "rust,zig"})

    assert [q["id"] for q in response.json()["questions"]] == [wanted.id]


def test_question_detail_counts_views(client, question) -> None:
    first = client.get(f"/api/questions/{question.id}")
    second = client.get(f"/api/questions/{question.id}")

    assert first.status_code == status.HTTP_200_OK
    assert first.json()["question"]["viewCount"] == 1
    assert second.json()["question"]["viewCount"] == 2
    assert first.json()["question"]["userVote"] is None


def test_question_detail_with_bad_token_is_anonymous(client, question) -> None:
    response = client.get(
        f"/api/questions/{question.id}", headers={"Authorization": "Bearer broken"}
    )
    assert response.status_code == status.HTTP_200_OK


def test_question_detail_missing(client) -> None:
    response = client.get("/api/questions/12345")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"success": False, "message": "Question not found", "code": "not_found"}


def test_answer_question(client, db_session, question, author, answerer, auth_headers) -> None:
    response = client.post(
        f"/api/questions/{question.id}/answers",
        json={"content": "<p>Use SQL-side increments.</p><script>x()</script>"},
        headers=auth_headers(answerer),
    )

    assert response.status_code == status.HTTP_201_CREATED
    answer = response.json()["answer"]
    assert answer["isAccepted"] is False
    assert answer["author"]["username"] == "answerer"
    assert "<script>" not in answer["content"]

    detail = client.get(f"/api/questions/{question.id}").json()["question"]
    assert detail["answerCount"] == 1
    assert [a["id"] for a in detail["answers"]] == [answer["id"]]

    inbox = client.get("/api/notifications", headers=auth_headers(author)).json()
    assert inbox["notifications"][0]["type"] == "answer"
    assert inbox["notifications"][0]["relatedQuestion"]["id"] == question.id


def test_answer_too_short(client, question, voter_headers) -> None:
    response = client.post(
        f"/api/questions/{question.id}/answers", json={"content": "short"}, headers=voter_headers
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
