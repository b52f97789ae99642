import secrets
from typing import TYPE_CHECKING, Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from reelforum.core.modules.session.models import SESSION_TTL_SECONDS, AuthToken, Session, hash_token
from reelforum.core.modules.user.models import User
from reelforum.core.service import Service
from reelforum.errors import AuthenticationError

if TYPE_CHECKING:
    from reelforum.core.core import Services

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Issues login tokens and resolves them back to forum members."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]], services: "Services") -> None:
        super().__init__(database, services)
        self._collection = database.get_collection("sessions")
        self._user_ids: dict[str, UUID] = {}  # token_hash -> user_id

    async def on_start(self) -> None:
        await self._collection.create_index([("token_hash", 1)], unique=True)
        await self._collection.create_index([("user_id", 1)])
        await self._collection.create_index([("created_at", 1)], expireAfterSeconds=SESSION_TTL_SECONDS)

    async def create_session(self, user_id: UUID) -> AuthToken:
        """Open a session and return the token; only its hash is stored."""
        auth_token = AuthToken(secrets.token_urlsafe(32))
        session = Session(user_id=user_id, token_hash=hash_token(auth_token))
        await self._collection.insert_one(session.to_mongo())
        self._user_ids[session.token_hash] = user_id
        logger.debug("session_created", user_id=user_id)
        return auth_token

    async def get_authenticated_user(self, auth_token: AuthToken) -> User:
        token_hash = hash_token(auth_token)
        user_id = self._user_ids.get(token_hash)
        if user_id is None:
            doc = await self._collection.find_one({"token_hash": token_hash})
            if doc is None:
                raise AuthenticationError("Invalid or expired session")
            user_id = Session.model_validate(doc).user_id

        if not self.services.user.has_user(user_id):
            raise AuthenticationError("Invalid or expired session")
        self._user_ids[token_hash] = user_id
        return self.services.user.get_user(user_id)

    async def is_auth_token_valid(self, auth_token: AuthToken) -> bool:
        try:
            await self.get_authenticated_user(auth_token)
        except AuthenticationError:
            return False
        return True

    async def invalidate_session(self, auth_token: AuthToken) -> None:
        token_hash = hash_token(auth_token)
        self._user_ids.pop(token_hash, None)
        await self._collection.delete_one({"token_hash": token_hash})
        logger.debug("session_closed")
