"""
Post repository - query composition and row shaping for posts.

Design notes
------------
- Every function takes the ``AsyncEngine`` as its first argument and checks
  out one pooled connection for the duration of the call.  Writes run in
  ``engine.begin()`` so each call is its own unit of work; nothing spans
  calls.
- Ownership is part of the statement itself (``WHERE id = :id AND
  author_id = :author_id``).  There is no read-then-write window between
  checking who owns a post and changing it.
- Likes are adjusted with column arithmetic in a single UPDATE, so
  concurrent likes are serialised by the store and never lost.
- List queries carry no ORDER BY; callers must not rely on row order.
"""
from sqlalchemy import Select, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncEngine

from blogapi.errors import InsertFailure
from blogapi.models import Comment, Post, User

_POST_COLUMNS = (
    Post.id,
    Post.title,
    Post.content,
    Post.created_at,
    Post.likes,
    Post.author_id,
)


def _posts_with_author() -> Select:
    """Post columns LEFT JOINed with the author's username."""
    return select(*_POST_COLUMNS, User.username).outerjoin(User, Post.author_id == User.id)


def _comments_with_author(post_id: int) -> Select:
    return (
        select(
            Comment.id,
            Comment.content,
            Comment.created_at,
            Comment.likes,
            Comment.author_id,
            User.username,
        )
        .outerjoin(User, Comment.author_id == User.id)
        .where(Comment.post_id == post_id)
    )


async def create(db: AsyncEngine, title: str, content: str | None, author_id: int | None) -> dict:
    """
    Insert a post and return the stored row.

    Raises ``InsertFailure`` unless exactly one row comes back.
    """
    stmt = (
        insert(Post)
        .values(title=title, content=content, author_id=author_id)
        .returning(*_POST_COLUMNS)
    )
    async with db.begin() as conn:
        rows = (await conn.execute(stmt)).mappings().all()
        if len(rows) != 1:
            raise InsertFailure(f"Failed to insert post (rows returned: {len(rows)})")
    return dict(rows[0])


async def list_all(db: AsyncEngine) -> list[dict]:
    async with db.connect() as conn:
        result = await conn.execute(_posts_with_author())
        return [dict(row) for row in result.mappings()]


async def list_by_author(db: AsyncEngine, author_id: int) -> list[dict]:
    async with db.connect() as conn:
        result = await conn.execute(_posts_with_author().where(Post.author_id == author_id))
        return [dict(row) for row in result.mappings()]


async def get_by_id(db: AsyncEngine, post_id: int) -> dict | None:
    """
    Return the post with its comments nested under ``"comments"``.

    Returns None when no post has *post_id*; the comment query is only
    issued for an existing post.
    """
    async with db.connect() as conn:
        rows = (
            await conn.execute(_posts_with_author().where(Post.id == post_id))
        ).mappings().all()
        if len(rows) != 1:
            return None

        comments = await conn.execute(_comments_with_author(post_id))
        post = dict(rows[0])
        post["comments"] = [dict(c) for c in comments.mappings()]
    return post


async def search_by_title(db: AsyncEngine, fragment: str) -> list[dict]:
    """
    Case-insensitive substring search on the title.

    ``autoescape`` makes ``%`` and ``_`` in *fragment* match literally.
    """
    stmt = _posts_with_author().where(Post.title.icontains(fragment, autoescape=True))
    async with db.connect() as conn:
        result = await conn.execute(stmt)
        return [dict(row) for row in result.mappings()]


async def delete_by_id(db: AsyncEngine, post_id: int, author_id: int) -> bool:
    """Delete the post only if *author_id* owns it.  True if a row went away."""
    stmt = delete(Post).where(Post.id == post_id, Post.author_id == author_id)
    async with db.begin() as conn:
        result = await conn.execute(stmt)
        return result.rowcount > 0


async def update_by_id(
    db: AsyncEngine, post_id: int, author_id: int, title: str, content: str
) -> bool:
    stmt = (
        update(Post)
        .where(Post.id == post_id, Post.author_id == author_id)
        .values(title=title, content=content)
    )
    async with db.begin() as conn:
        result = await conn.execute(stmt)
        return result.rowcount > 0


async def update_title_by_id(db: AsyncEngine, post_id: int, author_id: int, title: str) -> bool:
    stmt = (
        update(Post)
        .where(Post.id == post_id, Post.author_id == author_id)
        .values(title=title)
    )
    async with db.begin() as conn:
        result = await conn.execute(stmt)
        return result.rowcount > 0


async def _adjust_likes(db: AsyncEngine, post_id: int, delta: int) -> bool:
    stmt = update(Post).where(Post.id == post_id).values(likes=Post.likes + delta)
    async with db.begin() as conn:
        result = await conn.execute(stmt)
        return result.rowcount > 0


async def increment_likes(db: AsyncEngine, post_id: int) -> bool:
    return await _adjust_likes(db, post_id, 1)


async def decrement_likes(db: AsyncEngine, post_id: int) -> bool:
    return await _adjust_likes(db, post_id, -1)
