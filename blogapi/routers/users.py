from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine

from blogapi.config import settings
from blogapi.database import get_db
from blogapi.dependencies import get_json_body
from blogapi.errors import BadRequest, Conflict, unexpected_errors
from blogapi.repositories import user_repository
from blogapi.schemas import ErrorResponse, UserCreate, UserResponse
from blogapi.validation import Invalid, is_valid_string, validate_body

router = APIRouter(
    prefix="/api",
    tags=["users"],
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.post("/users", status_code=201, response_model=UserResponse)
async def create_user(
    body: dict | None = Depends(get_json_body),
    db: AsyncEngine = Depends(get_db),
):
    data = validate_body(body, UserCreate, username=is_valid_string, password=is_valid_string)
    if isinstance(data, Invalid):
        raise BadRequest(data.error)

    if len(data.password) < settings.MIN_PASSWORD_LENGTH:
        raise BadRequest(f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters")

    with unexpected_errors("create user"):
        try:
            return await user_repository.create(db, data.username, data.password)
        except IntegrityError:
            raise Conflict("A user with this username already exists")
