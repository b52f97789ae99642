"""Shared pytest fixtures."""

import copy
from types import SimpleNamespace
from typing import Any

import pytest

from reelforum.core.core import Services
from reelforum.core.modules.comment.tree import CommentTree


def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    return all(doc.get(key) == value for key, value in query.items())


def _exclude(doc: dict[str, Any], projection: dict[str, int] | None) -> dict[str, Any]:
    """Apply an exclusion projection such as {"comments.roots": 0}."""
    for path in projection or {}:
        *parents, leaf = path.split(".")
        target = doc
        for key in parents:
            target = target.get(key, {})
        target.pop(leaf, None)
    return doc


class FakeCursor:
    """Subset of AsyncCursor used by the services."""

    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._docs = sorted(self._docs, key=lambda d: d[key], reverse=direction < 0)
        return self

    def skip(self, count: int) -> "FakeCursor":
        self._docs = self._docs[count:]
        return self

    def limit(self, count: int) -> "FakeCursor":
        self._docs = self._docs[:count]
        return self

    async def to_list(self) -> list[dict[str, Any]]:
        return list(self._docs)

    def __aiter__(self) -> "FakeCursor":
        self._iter = iter(self._docs)
        return self

    async def __anext__(self) -> dict[str, Any]:
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration from None


class FakeCollection:
    """In-memory stand-in for a MongoDB collection, storing deep copies like a real store."""

    def __init__(self) -> None:
        self.docs: list[dict[str, Any]] = []

    async def create_index(self, *args: Any, **kwargs: Any) -> str:
        return "index"

    async def insert_one(self, doc: dict[str, Any]) -> SimpleNamespace:
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        doc = next((d for d in self.docs if _matches(d, query)), None)
        return copy.deepcopy(doc)

    def find(self, query: dict[str, Any] | None = None, projection: dict[str, int] | None = None) -> FakeCursor:
        return FakeCursor([_exclude(copy.deepcopy(d), projection) for d in self.docs if _matches(d, query or {})])

    async def count_documents(self, query: dict[str, Any]) -> int:
        return sum(1 for d in self.docs if _matches(d, query))

    async def find_one_and_update(self, query: dict[str, Any], update: dict[str, Any], **kwargs: Any) -> dict[str, Any] | None:
        """Supports $inc and $set on top-level fields; returns the updated document."""
        doc = next((d for d in self.docs if _matches(d, query)), None)
        if doc is None:
            return None
        for key, amount in update.get("$inc", {}).items():
            doc[key] = doc.get(key, 0) + amount
        for key, value in update.get("$set", {}).items():
            doc[key] = copy.deepcopy(value)
        return copy.deepcopy(doc)

    async def delete_one(self, query: dict[str, Any]) -> SimpleNamespace:
        for index, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture
def database():
    return FakeDatabase()


@pytest.fixture
def services(database):
    """Forum services wired to an in-memory database."""
    return Services(database)  # type: ignore[arg-type]


@pytest.fixture
def tree():
    """Empty comment tree."""
    return CommentTree()


@pytest.fixture
def deep_tree():
    """Tree with a chain alice -> bob -> carol -> dave -> erin plus a second root."""
    tree = CommentTree()
    chain = [tree.insert("alice", "root")]
    for author in ["bob", "carol", "dave", "erin"]:
        chain.append(tree.insert(author, f"reply from {author}", chain[-1].id))
    tree.insert("frank", "second root")
    return tree, chain
