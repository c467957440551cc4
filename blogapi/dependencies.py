import logging

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncEngine

from blogapi import auth
from blogapi.database import get_db
from blogapi.errors import Unauthorized, unexpected_errors
from blogapi.schemas import Identity

logger = logging.getLogger(__name__)


async def get_current_user(
    username: str | None = Header(None),
    password: str | None = Header(None),
    db: AsyncEngine = Depends(get_db),
) -> Identity:
    """
    Reusable FastAPI dependency that authenticates the caller from the
    ``username`` and ``password`` headers.

    Declare it first in a route's signature so an unauthenticated request
    is rejected before the body or the target resource is looked at.
    """
    with unexpected_errors("authentication"):
        identity = await auth.authenticate(db, username, password)
    if identity is None:
        raise Unauthorized("The username or password is incorrect")
    return identity


async def get_json_body(request: Request) -> dict | None:
    """
    Return the request body as a JSON object, or None when it is absent,
    unparseable, or not an object.  Routes turn None into a 400.
    """
    if not await request.body():
        return None
    try:
        payload = await request.json()
    except ValueError:
        logger.debug("Ignoring request body that is not valid JSON")
        return None
    return payload if isinstance(payload, dict) else None
