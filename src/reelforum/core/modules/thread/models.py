from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from reelforum.core.db import MongoModel
from reelforum.core.modules.comment.tree import CommentTree
from reelforum.utils import format_display_date, now


class Thread(MongoModel):
    """Discussion thread; the whole comment tree lives in this document."""

    title: str
    author: str  # Username of the thread starter
    content: str
    created_at: datetime = Field(default_factory=now)
    date: str = Field(default_factory=lambda data: format_display_date(data["created_at"]))
    comments: CommentTree = Field(default_factory=CommentTree)
    total_views: int = 0
    revision: int = 0  # Bumped on every comment save, guards read-modify-write


class ThreadSummary(BaseModel):
    """Thread as shown in the thread list, without its comments."""

    id: UUID
    title: str
    author: str
    date: str
    created_at: datetime
    total_comments: int
    total_views: int

    @classmethod
    def from_thread(cls, thread: Thread) -> "ThreadSummary":
        return cls(
            id=thread.id,
            title=thread.title,
            author=thread.author,
            date=thread.date,
            created_at=thread.created_at,
            total_comments=thread.comments.total_comments,
            total_views=thread.total_views,
        )


class ThreadPage(BaseModel):
    """One page of the thread list, newest first."""

    items: list[ThreadSummary] = Field(..., description="Threads on this page")
    total: int = Field(..., description="Number of threads in the forum", ge=0)
    limit: int = Field(..., description="Maximum threads per page", ge=1)
    offset: int = Field(..., description="Number of threads skipped", ge=0)
    has_more: bool = Field(..., description="Whether another page follows")
