"""
Comment endpoint tests - covers creating comments, validation, and
verifying that post detail responses include comment data.

Comments are append-only in this API (no edit/delete endpoints), so the
test surface is focused on creation and read-through verification.
"""
import pytest
from httpx import AsyncClient


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _create_post(client: AsyncClient, headers: dict) -> int:
    resp = await client.post(
        "/api/blogs", json={"title": "Post for comments", "content": "Body"}, headers=headers
    )
    assert resp.status_code == 201
    return resp.json()["id"]


# ---------------------------------------------------------------------------
# Create comment - happy path
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_comment(async_client: AsyncClient, auth_headers: dict, user: dict):
    """Posting a comment returns 201 with the stored row."""
    post_id = await _create_post(async_client, auth_headers)

    resp = await async_client.post(
        "/api/comments", json={"content": "Great post!", "postId": post_id}, headers=auth_headers
    )
    assert resp.status_code == 201
    comment = resp.json()
    assert comment["content"] == "Great post!"
    assert comment["post_id"] == post_id
    assert comment["author_id"] == user["id"]
    assert comment["likes"] == 0
    assert "id" in comment
    assert "created_at" in comment


@pytest.mark.asyncio
async def test_post_detail_includes_comments(async_client: AsyncClient, auth_headers: dict):
    """Post detail lists every comment with its author's username."""
    post_id = await _create_post(async_client, auth_headers)

    for i in range(3):
        resp = await async_client.post(
            "/api/comments", json={"content": f"Comment {i}", "postId": post_id}, headers=auth_headers
        )
        assert resp.status_code == 201

    detail = await async_client.get(f"/api/blogs/{post_id}")
    assert detail.status_code == 200
    comments = detail.json()["comments"]
    assert {c["content"] for c in comments} == {"Comment 0", "Comment 1", "Comment 2"}
    for comment in comments:
        assert comment["username"] == "ann"
        assert "created_at" in comment


# ---------------------------------------------------------------------------
# Create comment - error paths
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_comment_requires_credentials(async_client: AsyncClient, auth_headers: dict):
    post_id = await _create_post(async_client, auth_headers)

    resp = await async_client.post("/api/comments", json={"content": "Hi", "postId": post_id})
    assert resp.status_code == 401
    assert resp.json() == {"error": "The username or password is incorrect"}


@pytest.mark.asyncio
async def test_create_comment_without_body(async_client: AsyncClient, auth_headers: dict):
    resp = await async_client.post("/api/comments", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "A JSON body must be included"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, message",
    [
        ({"postId": 1}, "Content must be included and be a string"),
        ({"content": "Hi"}, "PostId must be included and be a number"),
        ({"content": "Hi", "postId": "1"}, "PostId must be included and be a number"),
        ({"content": "Hi", "postId": 1.5}, "PostId must be included and be a number"),
    ],
)
async def test_create_comment_invalid_fields(
    async_client: AsyncClient, auth_headers: dict, payload: dict, message: str
):
    resp = await async_client.post("/api/comments", json=payload, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": message}


@pytest.mark.asyncio
async def test_comment_on_nonexistent_post(async_client: AsyncClient, auth_headers: dict):
    """An unknown postId is rejected by the store and reported without detail."""
    resp = await async_client.post(
        "/api/comments", json={"content": "Ghost comment", "postId": 99999}, headers=auth_headers
    )
    assert resp.status_code == 500
    assert resp.json() == {"error": "An unexpected error occurred."}
