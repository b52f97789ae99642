from typing import TYPE_CHECKING, Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from reelforum.core.modules.thread.models import Thread, ThreadPage, ThreadSummary
from reelforum.core.service import Service
from reelforum.errors import ConflictError, NotFoundError

if TYPE_CHECKING:
    from reelforum.core.core import Services

logger = structlog.get_logger(__name__)

# The list view needs counters only, not the comment trees
SUMMARY_PROJECTION = {"comments.roots": 0}


class ThreadService(Service):
    """Loads and stores threads as whole documents, comment tree included."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]], services: "Services") -> None:
        super().__init__(database, services)
        self._collection = database.get_collection("threads")

    async def on_start(self) -> None:
        await self._collection.create_index([("created_at", -1)])

    async def create_thread(self, author: str, title: str, content: str) -> Thread:
        """Create thread with an empty comment tree."""
        thread = Thread(title=title, author=author, content=content)
        await self._collection.insert_one(thread.to_mongo())
        logger.debug("thread_created", thread_id=thread.id, author=author)
        return thread

    async def get_thread(self, thread_id: UUID) -> Thread:
        doc = await self._collection.find_one({"_id": thread_id})
        if not doc:
            raise NotFoundError(f"Thread not found: {thread_id}")
        return Thread.model_validate(doc)

    async def list_threads(self, limit: int = 50, offset: int = 0) -> ThreadPage:
        """Get a page of thread summaries, newest first."""
        total = await self._collection.count_documents({})
        cursor = self._collection.find({}, SUMMARY_PROJECTION).sort("created_at", -1).skip(offset).limit(limit)
        items = [ThreadSummary.from_thread(thread) for thread in await Thread.list_cursor(cursor)]
        return ThreadPage(items=items, total=total, limit=limit, offset=offset, has_more=offset + len(items) < total)

    async def record_view(self, thread_id: UUID) -> Thread:
        """Atomically bump the view counter and return the thread."""
        doc = await self._collection.find_one_and_update(
            {"_id": thread_id},
            {"$inc": {"total_views": 1}},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise NotFoundError(f"Thread not found: {thread_id}")
        return Thread.model_validate(doc)

    async def save_thread(self, thread: Thread) -> Thread:
        """Write back the comment tree of a thread loaded earlier.

        Only the comments and revision are written, so counters updated in
        place (views) are kept. The write applies only if no other comment
        save happened since the thread was loaded; otherwise ConflictError is
        raised and the stored document is left alone.
        """
        doc = await self._collection.find_one_and_update(
            {"_id": thread.id, "revision": thread.revision},
            {"$set": {"comments": thread.comments.model_dump(), "revision": thread.revision + 1}},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            if await self._collection.count_documents({"_id": thread.id}) == 0:
                raise NotFoundError(f"Thread not found: {thread.id}")
            logger.warning("thread_save_conflict", thread_id=thread.id, revision=thread.revision)
            raise ConflictError("Thread was modified by another request, reload and try again")
        return Thread.model_validate(doc)
