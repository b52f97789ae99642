"""Threaded comment tree stored inside a thread document.

Comments are never removed from the tree. Deleting a comment clears its author
and replaces its content, so replies under it stay in place and reachable.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from reelforum.core.modules.comment.models import DELETED_CONTENT, Comment
from reelforum.errors import CommentNotFoundError, ParentNotFoundError, UnauthorizedError, ValidationError
from reelforum.utils import now

# Each reply level adds two levels of BSON nesting; MongoDB allows 100 in total
MAX_REPLY_DEPTH = 40


@dataclass
class CommentLocation:
    """A located comment together with where it sits in the tree."""

    comment: Comment
    parent: Comment | None  # None for top-level comments
    siblings: list[Comment]  # The list holding the comment (roots or parent.replies)
    index: int
    depth: int


class CommentTree(BaseModel):
    """Top-level comments of a thread plus the running insert counter."""

    roots: list[Comment] = Field(default_factory=list)
    total_comments: int = Field(default=0, ge=0)  # Successful inserts, tombstones included

    def locate(self, comment_id: UUID) -> CommentLocation | None:
        """Find a comment at any depth, depth-first in display order.

        Returns None when no comment has the id.
        """
        stack = [(comment, None, self.roots, index, 0) for index, comment in reversed(list(enumerate(self.roots)))]
        while stack:
            comment, parent, siblings, index, depth = stack.pop()
            if comment.id == comment_id:
                return CommentLocation(comment=comment, parent=parent, siblings=siblings, index=index, depth=depth)
            for reply_index in range(len(comment.replies) - 1, -1, -1):
                stack.append((comment.replies[reply_index], comment, comment.replies, reply_index, depth + 1))
        return None

    def find(self, comment_id: UUID) -> Comment | None:
        location = self.locate(comment_id)
        return location.comment if location else None

    def iter_comments(self) -> Iterator[Comment]:
        """Yield every comment, tombstones included, in display order."""
        stack = list(reversed(self.roots))
        while stack:
            comment = stack.pop()
            yield comment
            stack.extend(reversed(comment.replies))

    def insert(
        self,
        author: str,
        content: str,
        parent_id: UUID | None = None,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> Comment:
        """Append a new comment at top level or under ``parent_id``.

        Replies deeper than MAX_REPLY_DEPTH are rejected so the thread still
        fits in a single stored document.
        """
        if parent_id is None:
            target = self.roots
        else:
            location = self.locate(parent_id)
            if location is None:
                raise ParentNotFoundError(f"Parent comment not found: {parent_id}")
            if location.depth + 1 > MAX_REPLY_DEPTH:
                raise ValidationError(f"Replies cannot be nested more than {MAX_REPLY_DEPTH} levels deep")
            target = location.comment.replies

        comment = Comment(id=id_factory(), author=author, content=content)
        if self.find(comment.id) is not None:
            raise ValidationError(f"Comment id already used in this thread: {comment.id}")

        target.append(comment)
        self.total_comments += 1
        return comment

    def edit(self, comment_id: UUID, requester: str, content: str) -> Comment:
        """Replace the content of a comment owned by ``requester``.

        Empty content leaves the comment as it is. Deleted comments have no
        owner and cannot be edited.
        """
        comment = self._get_owned(comment_id, requester)
        if content:
            comment.content = content
            comment.edited_at = now()
        return comment

    def soft_delete(self, comment_id: UUID, requester: str) -> Comment:
        """Tombstone a comment owned by ``requester``, keeping its replies.

        Deleting an already deleted comment fails, as it has no owner left.
        """
        comment = self._get_owned(comment_id, requester)
        comment.author = ""
        comment.content = DELETED_CONTENT
        return comment

    def _get_owned(self, comment_id: UUID, requester: str) -> Comment:
        comment = self.find(comment_id)
        if comment is None:
            raise CommentNotFoundError(f"Comment not found: {comment_id}")
        # Tombstones have no author left, so nobody owns them
        if comment.is_deleted or comment.author != requester:
            raise UnauthorizedError(f"Comment {comment_id} does not belong to '{requester}'")
        return comment
