from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncEngine

from blogapi.database import get_db
from blogapi.dependencies import get_current_user, get_json_body
from blogapi.errors import BadRequest, unexpected_errors
from blogapi.repositories import comment_repository
from blogapi.schemas import CommentCreate, CommentResponse, ErrorResponse, Identity
from blogapi.validation import Invalid, is_valid_id, is_valid_string, validate_body

router = APIRouter(
    prefix="/api",
    tags=["comments"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.post("/comments", status_code=201, response_model=CommentResponse)
async def create_comment(
    user: Identity = Depends(get_current_user),
    body: dict | None = Depends(get_json_body),
    db: AsyncEngine = Depends(get_db),
):
    data = validate_body(body, CommentCreate, content=is_valid_string, postId=is_valid_id)
    if isinstance(data, Invalid):
        raise BadRequest(data.error)

    # An unknown postId fails the foreign key and is reported as a 500.
    with unexpected_errors("create comment"):
        return await comment_repository.create(db, data.content, data.post_id, user.id)
