from datetime import datetime

from pydantic import Field

from reelforum.core.db import MongoModel
from reelforum.utils import format_display_date, now

DELETED_CONTENT = "Comment was deleted"


class Comment(MongoModel):
    """Comment in a thread, owning its replies in display order."""

    author: str  # Username; "" once the comment is soft-deleted
    content: str
    created_at: datetime = Field(default_factory=now)
    date: str = Field(default_factory=lambda data: format_display_date(data["created_at"]))
    edited_at: datetime | None = None
    replies: list["Comment"] = Field(default_factory=list)

    @property
    def is_deleted(self) -> bool:
        """Whether the comment has been tombstoned."""
        return self.author == ""
