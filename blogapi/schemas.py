from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# --- Errors ---

class ErrorResponse(BaseModel):
    error: str


# --- User ---

class UserCreate(BaseModel):
    username: str
    password: str


class Identity(BaseModel):
    """The authenticated caller, as returned by the credential gate."""
    id: int
    username: str
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class UserResponse(Identity):
    pass


# --- Comment ---

class CommentCreate(BaseModel):
    content: str
    post_id: int = Field(alias="postId")


class CommentResponse(BaseModel):
    id: int
    content: str
    created_at: datetime
    likes: int
    author_id: int | None
    post_id: int
    model_config = ConfigDict(from_attributes=True)


class PostComment(BaseModel):
    """A comment embedded in a post detail, with its author's username."""
    id: int
    content: str
    created_at: datetime
    likes: int
    author_id: int | None
    username: str | None = None


# --- Post ---

class PostCreate(BaseModel):
    title: str
    content: str


class PostReplace(PostCreate):
    pass


class TitleUpdate(BaseModel):
    title: str


class PostResponse(BaseModel):
    id: int
    title: str
    content: str | None
    created_at: datetime
    likes: int
    author_id: int | None
    model_config = ConfigDict(from_attributes=True)


class PostListItem(PostResponse):
    username: str | None = None


class PostDetail(PostListItem):
    comments: list[PostComment] = []
