# tests/v1/test_tags.py
"""Tests for public tag listings."""

from fastapi import status

BODY = "<p>This description is comfortably longer than twenty characters.</p>"


def _ask(client, headers, title, tags):
    response = client.post(
        "/api/questions",
        json={"title": title, "description": BODY, "tags": tags},
        headers=headers,
    )
    assert response.status_code == status.HTTP_201_CREATED


def test_tags_listing_and_popular(client, author_headers) -> None:
    _ask(client, author_headers, "First question on python", ["python", "sql"])
    _ask(client, author_headers, "Second question on python", ["python"])

    body = client.get("/api/tags").json()
    assert body["tags"] == ["python", "sql"]
    assert body["fullTags"][0]["questionCount"] == 2
    assert body["fullTags"][0]["color"] == "#3B82F6"

    alphabetical = client.get("/api/tags", params={"sort": "alphabetical"}).json()
    assert alphabetical["tags"] == ["python", "sql"]

    popular = client.get("/api/tags/popular", params={"limit": 1}).json()
    assert [tag["name"] for tag in popular["tags"]] == ["python"]


def test_popular_skips_unused_tags(client, admin_headers) -> None:
    client.post("/api/admin/tags", json={"name": "unused"}, headers=admin_headers)

    assert client.get("/api/tags").json()["tags"] == ["unused"]
    assert client.get("/api/tags/popular").json()["tags"] == []
