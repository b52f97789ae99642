from typing import TYPE_CHECKING, Any

from pymongo.asynchronous.database import AsyncDatabase

if TYPE_CHECKING:
    from reelforum.core.core import Services


class Service:
    """Base class for services: one database, and the sibling services through ``services``."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]], services: "Services") -> None:
        self.database = database
        self.services = services

    async def on_start(self) -> None:
        """Create indexes and warm caches on application startup."""
