"""
Comment repository - comments are append-only.

They are created here and read back only as part of a post's detail view
(see ``post_repository.get_by_id``); there is no edit or delete path.
A ``post_id`` with no matching post is rejected by the foreign key and
surfaces as the store's ``IntegrityError``.
"""
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine

from blogapi.errors import InsertFailure
from blogapi.models import Comment


async def create(db: AsyncEngine, content: str, post_id: int, author_id: int | None) -> dict:
    """Insert a comment and return the stored row."""
    stmt = (
        insert(Comment)
        .values(content=content, post_id=post_id, author_id=author_id)
        .returning(
            Comment.id,
            Comment.content,
            Comment.created_at,
            Comment.likes,
            Comment.author_id,
            Comment.post_id,
        )
    )
    async with db.begin() as conn:
        rows = (await conn.execute(stmt)).mappings().all()
        if len(rows) != 1:
            raise InsertFailure(f"Failed to insert comment (rows returned: {len(rows)})")
    return dict(rows[0])
