"""
User repository - account creation and the credential lookup behind
``blogapi.auth``.

The password column is written but never selected back out.
"""
from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncEngine

from blogapi.errors import InsertFailure
from blogapi.models import User

_PUBLIC_COLUMNS = (User.id, User.username, User.created_at)


async def create(db: AsyncEngine, username: str, password: str) -> dict:
    """
    Insert a user and return ``{id, username, created_at}``.

    Username uniqueness is enforced by the database; a duplicate raises
    ``IntegrityError`` and the router translates it into a 409.
    """
    stmt = insert(User).values(username=username, password=password).returning(*_PUBLIC_COLUMNS)
    async with db.begin() as conn:
        rows = (await conn.execute(stmt)).mappings().all()
        if len(rows) != 1:
            raise InsertFailure(f"Failed to insert user (rows returned: {len(rows)})")
    return dict(rows[0])


async def find_by_credentials(db: AsyncEngine, username: str, password: str) -> list[dict]:
    stmt = select(*_PUBLIC_COLUMNS).where(User.username == username, User.password == password)
    async with db.connect() as conn:
        result = await conn.execute(stmt)
        return [dict(row) for row in result.mappings()]
