"""
Credential gate.

Credentials arrive as plain ``username``/``password`` request headers and
are compared verbatim against the stored row; there is no hashing and no
session token.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from blogapi.repositories import user_repository
from blogapi.schemas import Identity
from blogapi.validation import is_valid_string

logger = logging.getLogger(__name__)


async def authenticate(db: AsyncEngine, username: str | None, password: str | None) -> Identity | None:
    """
    Return the caller's identity when exactly one user matches both
    *username* and *password*, otherwise None.
    """
    if not is_valid_string(username) or not is_valid_string(password):
        return None

    rows = await user_repository.find_by_credentials(db, username, password)
    if len(rows) != 1:
        if rows:
            logger.warning("Credential lookup for %r matched %d users", username, len(rows))
        return None
    return Identity(**rows[0])
