from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncEngine

from blogapi.database import get_db
from blogapi.dependencies import get_current_user, get_json_body
from blogapi.errors import BadRequest, NotFound, unexpected_errors
from blogapi.repositories import post_repository
from blogapi.schemas import (
    ErrorResponse,
    Identity,
    PostCreate,
    PostDetail,
    PostListItem,
    PostReplace,
    PostResponse,
    TitleUpdate,
)
from blogapi.validation import Invalid, is_valid_string, parse_id, validate_body

router = APIRouter(
    prefix="/api",
    tags=["posts"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


def _post_id(raw: str) -> int:
    post_id = parse_id(raw)
    if post_id is None:
        raise BadRequest("Post id must be a number")
    return post_id


def _post_not_found(post_id: int) -> NotFound:
    return NotFound(f"A post with id '{post_id}' does not exist")


@router.post("/blogs", status_code=201, response_model=PostResponse)
async def create_post(
    user: Identity = Depends(get_current_user),
    body: dict | None = Depends(get_json_body),
    db: AsyncEngine = Depends(get_db),
):
    data = validate_body(body, PostCreate, title=is_valid_string, content=is_valid_string)
    if isinstance(data, Invalid):
        raise BadRequest(data.error)

    with unexpected_errors("create post"):
        return await post_repository.create(db, data.title, data.content, user.id)


@router.get("/blogs", response_model=list[PostListItem])
async def list_posts(db: AsyncEngine = Depends(get_db)):
    with unexpected_errors("list posts"):
        return await post_repository.list_all(db)


@router.get("/blogs/self", response_model=list[PostListItem])
async def list_own_posts(
    user: Identity = Depends(get_current_user),
    db: AsyncEngine = Depends(get_db),
):
    with unexpected_errors("list own posts"):
        return await post_repository.list_by_author(db, user.id)


@router.get("/blogs/search", response_model=list[PostListItem])
async def search_posts(title: str | None = None, db: AsyncEngine = Depends(get_db)):
    if not is_valid_string(title):
        raise BadRequest("Title must be a string")

    with unexpected_errors("search posts"):
        return await post_repository.search_by_title(db, title)


@router.get("/blogs/{post_id}", response_model=PostDetail)
async def get_post(post_id: str, db: AsyncEngine = Depends(get_db)):
    pid = _post_id(post_id)

    with unexpected_errors("get post"):
        post = await post_repository.get_by_id(db, pid)
    if post is None:
        raise _post_not_found(pid)
    return post


@router.delete("/blogs/{post_id}", status_code=204)
async def delete_post(
    post_id: str,
    user: Identity = Depends(get_current_user),
    db: AsyncEngine = Depends(get_db),
):
    pid = _post_id(post_id)

    with unexpected_errors("delete post"):
        deleted = await post_repository.delete_by_id(db, pid, user.id)
    if not deleted:
        raise _post_not_found(pid)


@router.put("/blogs/{post_id}", status_code=204)
async def replace_post(
    post_id: str,
    user: Identity = Depends(get_current_user),
    body: dict | None = Depends(get_json_body),
    db: AsyncEngine = Depends(get_db),
):
    data = validate_body(body, PostReplace, title=is_valid_string, content=is_valid_string)
    if isinstance(data, Invalid):
        raise BadRequest(data.error)
    pid = _post_id(post_id)

    with unexpected_errors("replace post"):
        updated = await post_repository.update_by_id(db, pid, user.id, data.title, data.content)
    if not updated:
        raise _post_not_found(pid)


@router.patch("/blogs/{post_id}/title", status_code=204)
async def update_post_title(
    post_id: str,
    user: Identity = Depends(get_current_user),
    body: dict | None = Depends(get_json_body),
    db: AsyncEngine = Depends(get_db),
):
    data = validate_body(body, TitleUpdate, title=is_valid_string)
    if isinstance(data, Invalid):
        raise BadRequest(data.error)
    pid = _post_id(post_id)

    with unexpected_errors("update post title"):
        updated = await post_repository.update_title_by_id(db, pid, user.id, data.title)
    if not updated:
        raise _post_not_found(pid)


@router.patch("/blogs/{post_id}/like", status_code=204)
async def like_post(post_id: str, db: AsyncEngine = Depends(get_db)):
    pid = _post_id(post_id)

    with unexpected_errors("like post"):
        updated = await post_repository.increment_likes(db, pid)
    if not updated:
        raise _post_not_found(pid)


@router.patch("/blogs/{post_id}/dislike", status_code=204)
async def dislike_post(post_id: str, db: AsyncEngine = Depends(get_db)):
    pid = _post_id(post_id)

    with unexpected_errors("dislike post"):
        updated = await post_repository.decrement_likes(db, pid)
    if not updated:
        raise _post_not_found(pid)


@router.get("/authors/{author_id}/blogs", response_model=list[PostListItem])
async def list_author_posts(author_id: str, db: AsyncEngine = Depends(get_db)):
    aid = parse_id(author_id)
    if aid is None:
        raise BadRequest("Author id must be a number")

    with unexpected_errors("list author posts"):
        return await post_repository.list_by_author(db, aid)
