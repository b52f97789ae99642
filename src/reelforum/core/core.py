from collections.abc import AsyncGenerator, Iterator
from contextlib import asynccontextmanager
from typing import Any

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from reelforum.config import Config
from reelforum.core.modules.access.service import AccessService
from reelforum.core.modules.comment.service import CommentService
from reelforum.core.modules.session.service import SessionService
from reelforum.core.modules.thread.service import ThreadService
from reelforum.core.modules.user.service import UserService
from reelforum.core.service import Service


class Services:
    """The forum's services sharing one database, in startup order."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.user = UserService(database, self)
        self.session = SessionService(database, self)
        self.access = AccessService(database, self)
        self.thread = ThreadService(database, self)
        self.comment = CommentService(database, self)

    def __iter__(self) -> Iterator[Service]:
        return iter((self.user, self.session, self.access, self.thread, self.comment))

    async def start_all(self) -> None:
        for service in self:
            await service.on_start()


class Core:
    """MongoDB connection plus the services that use it."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self.mongo_client: AsyncMongoClient[dict[str, Any]] = AsyncMongoClient(
            config.database_url, uuidRepresentation="standard", tz_aware=True
        )
        self.services = Services(self.mongo_client.get_database(config.database_name))

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Start services, and close the MongoDB client on shutdown."""
        await self.services.start_all()
        try:
            yield
        finally:
            await self.mongo_client.aclose()
