"""Tests for thread persistence."""

from uuid import uuid4

import pytest

from reelforum.errors import NotFoundError


class TestThreadService:
    async def test_create_starts_with_empty_tree(self, services):
        thread = await services.thread.create_thread("alice", "Title", "Body")

        stored = await services.thread.get_thread(thread.id)
        assert stored.title == "Title"
        assert stored.author == "alice"
        assert stored.comments.roots == []
        assert stored.comments.total_comments == 0
        assert stored.total_views == 0
        assert stored.revision == 0

    async def test_get_missing_thread(self, services):
        with pytest.raises(NotFoundError, match="Thread not found"):
            await services.thread.get_thread(uuid4())

    async def test_record_view_increments(self, services):
        thread = await services.thread.create_thread("alice", "Title", "Body")

        await services.thread.record_view(thread.id)
        viewed = await services.thread.record_view(thread.id)

        assert viewed.total_views == 2

    async def test_record_view_missing_thread(self, services):
        with pytest.raises(NotFoundError):
            await services.thread.record_view(uuid4())

    async def test_list_threads_paginates(self, services):
        for i in range(3):
            await services.thread.create_thread("alice", f"Thread {i}", "Body")

        page = await services.thread.list_threads(limit=2, offset=0)

        assert page.total == 3
        assert len(page.items) == 2
        assert page.has_more

        last = await services.thread.list_threads(limit=2, offset=2)
        assert len(last.items) == 1
        assert not last.has_more

    async def test_list_threads_leaves_out_comments(self, services):
        thread = await services.thread.create_thread("alice", "Title", "Body")
        thread.comments.insert("bob", "hi")
        await services.thread.save_thread(thread)
        await services.thread.record_view(thread.id)

        page = await services.thread.list_threads()

        [summary] = page.items
        assert summary.id == thread.id
        assert summary.total_comments == 1
        assert summary.total_views == 1
        assert "comments" not in summary.model_dump()

    async def test_save_bumps_revision(self, services):
        thread = await services.thread.create_thread("alice", "Title", "Body")
        thread.comments.insert("bob", "hi")

        saved = await services.thread.save_thread(thread)

        assert saved.revision == 1
        assert thread.revision == 0
        assert (await services.thread.get_thread(thread.id)).revision == 1

    async def test_save_keeps_views_recorded_after_load(self, services):
        created = await services.thread.create_thread("alice", "Title", "Body")
        thread = await services.thread.get_thread(created.id)
        await services.thread.record_view(thread.id)
        await services.thread.record_view(thread.id)
        thread.comments.insert("bob", "hi")

        saved = await services.thread.save_thread(thread)

        stored = await services.thread.get_thread(thread.id)
        assert saved.total_views == stored.total_views == 2
        assert stored.revision == 1
        assert stored.comments.total_comments == 1

    async def test_save_deleted_thread(self, services, database):
        thread = await services.thread.create_thread("alice", "Title", "Body")
        database.get_collection("threads").docs.clear()

        with pytest.raises(NotFoundError):
            await services.thread.save_thread(thread)
