from collections.abc import Callable
from uuid import UUID

import structlog

from reelforum.core.modules.comment.models import Comment
from reelforum.core.modules.comment.tree import CommentTree
from reelforum.core.modules.thread.models import Thread
from reelforum.core.service import Service

logger = structlog.get_logger(__name__)


class CommentService(Service):
    """Applies comment tree mutations to stored threads.

    Every call is one load, mutate and save cycle on a single thread document.
    A failing mutation raises before anything is saved.
    """

    async def get_comments(self, thread_id: UUID) -> CommentTree:
        """Get the comment tree of a thread."""
        thread = await self.services.thread.get_thread(thread_id)
        return thread.comments

    async def insert_top_level(self, thread_id: UUID, author: str, content: str) -> Thread:
        """Add a top-level comment to a thread."""
        thread, comment = await self._mutate(thread_id, lambda tree: tree.insert(author, content))
        logger.debug("comment_inserted", thread_id=thread_id, comment_id=comment.id, parent_id=None, author=author)
        return thread

    async def insert_reply(self, thread_id: UUID, parent_comment_id: UUID, author: str, content: str) -> Thread:
        """Add a reply under an existing comment at any depth."""
        thread, comment = await self._mutate(thread_id, lambda tree: tree.insert(author, content, parent_comment_id))
        logger.debug(
            "comment_inserted", thread_id=thread_id, comment_id=comment.id, parent_id=parent_comment_id, author=author
        )
        return thread

    async def edit_comment(self, thread_id: UUID, comment_id: UUID, requester: str, new_content: str) -> Thread:
        """Replace comment content (author only)."""
        thread, _ = await self._mutate(thread_id, lambda tree: tree.edit(comment_id, requester, new_content))
        logger.debug("comment_edited", thread_id=thread_id, comment_id=comment_id, requester=requester)
        return thread

    async def delete_comment(self, thread_id: UUID, comment_id: UUID, requester: str) -> Thread:
        """Soft-delete a comment (author only), keeping its replies."""
        thread, _ = await self._mutate(thread_id, lambda tree: tree.soft_delete(comment_id, requester))
        logger.debug("comment_soft_deleted", thread_id=thread_id, comment_id=comment_id, requester=requester)
        return thread

    async def _mutate(self, thread_id: UUID, mutation: Callable[[CommentTree], Comment]) -> tuple[Thread, Comment]:
        thread = await self.services.thread.get_thread(thread_id)
        comment = mutation(thread.comments)
        saved = await self.services.thread.save_thread(thread)
        return saved, comment
