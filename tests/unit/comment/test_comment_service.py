"""Tests for CommentService load, mutate and save cycles."""

from uuid import uuid4

import pytest

from reelforum.core.modules.comment.tree import MAX_REPLY_DEPTH
from reelforum.errors import (
    CommentNotFoundError,
    ConflictError,
    NotFoundError,
    ParentNotFoundError,
    UnauthorizedError,
    ValidationError,
)


@pytest.fixture
async def thread(services):
    return await services.thread.create_thread("alice", "Trails", "Where to hike?")


async def stored_thread(services, thread_id):
    return await services.thread.get_thread(thread_id)


class TestInsert:
    async def test_top_level_comment_is_persisted(self, services, thread):
        updated = await services.comment.insert_top_level(thread.id, "alice", "hi")

        stored = await stored_thread(services, thread.id)
        assert stored.comments.total_comments == 1
        assert stored.comments.roots[0].author == "alice"
        assert stored.comments.roots[0].content == "hi"
        assert updated.revision == stored.revision == 1

    async def test_reply_is_persisted_under_parent(self, services, thread):
        updated = await services.comment.insert_top_level(thread.id, "alice", "hi")
        root_id = updated.comments.roots[0].id

        updated = await services.comment.insert_reply(thread.id, root_id, "bob", "hey")

        stored = await stored_thread(services, thread.id)
        assert stored.comments.total_comments == 2
        assert [r.content for r in stored.comments.find(root_id).replies] == ["hey"]
        assert updated.model_dump() == stored.model_dump()

    async def test_unknown_thread(self, services):
        with pytest.raises(NotFoundError):
            await services.comment.insert_top_level(uuid4(), "alice", "hi")

    async def test_unknown_parent_saves_nothing(self, services, thread):
        await services.comment.insert_top_level(thread.id, "alice", "hi")
        before = await stored_thread(services, thread.id)

        with pytest.raises(ParentNotFoundError):
            await services.comment.insert_reply(thread.id, uuid4(), "bob", "hey")

        after = await stored_thread(services, thread.id)
        assert after.model_dump() == before.model_dump()

    async def test_too_deep_reply_saves_nothing(self, services, thread):
        loaded = await services.thread.get_thread(thread.id)
        parent = loaded.comments.insert("alice", "0")
        for i in range(MAX_REPLY_DEPTH):
            parent = loaded.comments.insert("alice", str(i + 1), parent.id)
        before = (await services.thread.save_thread(loaded)).model_dump()

        with pytest.raises(ValidationError):
            await services.comment.insert_reply(thread.id, parent.id, "bob", "too deep")

        after = await stored_thread(services, thread.id)
        assert after.model_dump() == before


class TestEditAndDelete:
    @pytest.fixture
    async def conversation(self, services, thread):
        updated = await services.comment.insert_top_level(thread.id, "alice", "hi")
        root_id = updated.comments.roots[0].id
        updated = await services.comment.insert_reply(thread.id, root_id, "bob", "hey")
        reply_id = updated.comments.find(root_id).replies[0].id
        return root_id, reply_id

    async def test_edit_by_author(self, services, thread, conversation):
        root_id, _ = conversation
        await services.comment.edit_comment(thread.id, root_id, "alice", "hello")

        stored = await stored_thread(services, thread.id)
        assert stored.comments.find(root_id).content == "hello"
        assert stored.comments.total_comments == 2

    async def test_edit_by_other_user_saves_nothing(self, services, thread, conversation):
        root_id, _ = conversation
        before = await stored_thread(services, thread.id)

        with pytest.raises(UnauthorizedError):
            await services.comment.edit_comment(thread.id, root_id, "bob", "changed")

        after = await stored_thread(services, thread.id)
        assert after.model_dump() == before.model_dump()

    async def test_delete_keeps_reply(self, services, thread, conversation):
        root_id, reply_id = conversation
        await services.comment.delete_comment(thread.id, root_id, "alice")

        stored = await stored_thread(services, thread.id)
        root = stored.comments.find(root_id)
        assert root.author == ""
        assert root.content == "Comment was deleted"
        assert [r.id for r in root.replies] == [reply_id]
        assert stored.comments.total_comments == 2

    async def test_delete_missing_comment(self, services, thread, conversation):
        with pytest.raises(CommentNotFoundError):
            await services.comment.delete_comment(thread.id, uuid4(), "alice")

    async def test_get_comments_returns_tree(self, services, thread, conversation):
        root_id, reply_id = conversation
        tree = await services.comment.get_comments(thread.id)

        assert tree.total_comments == 2
        assert tree.find(reply_id) is not None
        assert tree.locate(reply_id).parent.id == root_id


class TestConcurrentWriters:
    async def test_stale_save_is_rejected(self, services, thread):
        first = await services.thread.get_thread(thread.id)
        second = await services.thread.get_thread(thread.id)

        first.comments.insert("alice", "first writer")
        await services.thread.save_thread(first)

        second.comments.insert("bob", "second writer")
        with pytest.raises(ConflictError):
            await services.thread.save_thread(second)

        stored = await stored_thread(services, thread.id)
        assert [c.content for c in stored.comments.roots] == ["first writer"]
        assert stored.comments.total_comments == 1
