from typing import TYPE_CHECKING, Any
from uuid import UUID

import bcrypt
import structlog
from pymongo.asynchronous.database import AsyncDatabase

from reelforum.core.modules.user.models import User
from reelforum.core.modules.user.validators import validate_password, validate_username
from reelforum.core.service import Service
from reelforum.errors import ConflictError, NotFoundError

if TYPE_CHECKING:
    from reelforum.core.core import Services

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Manages forum members with in-memory cache."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]], services: "Services") -> None:
        super().__init__(database, services)
        self._collection = database.get_collection("users")
        self._users: dict[UUID, User] = {}

    def get_user(self, user_id: UUID) -> User:
        """Get user by ID from cache."""
        if user_id not in self._users:
            raise NotFoundError(f"User '{user_id}' not found")
        return self._users[user_id]

    def get_user_by_username(self, username: str) -> User:
        """Get user by username from cache."""
        user = next((u for u in self._users.values() if u.username == username), None)
        if user is None:
            raise NotFoundError(f"User '{username}' not found")
        return user

    def has_user(self, user_id: UUID) -> bool:
        return user_id in self._users

    def has_username(self, username: str) -> bool:
        return any(user.username == username for user in self._users.values())

    def has_email(self, email: str) -> bool:
        email = email.lower()
        return any(user.email == email for user in self._users.values())

    async def create_user(
        self, username: str, password: str, email: str, first_name: str = "", last_name: str = ""
    ) -> User:
        """Register a user with a hashed password."""
        if self.has_email(email):
            raise ConflictError("Email already exists")
        if self.has_username(username):
            raise ConflictError("Username already exists")

        validate_username(username)
        validate_password(password)
        password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=12)).decode("utf-8")
        user = User(
            username=username,
            email=email.lower(),
            first_name=first_name,
            last_name=last_name,
            password_hash=password_hash,
        )
        res = await self._collection.insert_one(user.to_mongo())
        logger.info("user_created", username=username)
        return await self.update_user_cache(res.inserted_id)

    def verify_password(self, username: str, password: str) -> bool:
        """Verify password against stored hash."""
        user = next((u for u in self._users.values() if u.username == username), None)
        if user is None:
            return False
        return bcrypt.checkpw(password.encode("utf-8"), user.password_hash.encode("utf-8"))

    async def update_all_users_cache(self) -> None:
        """Reload all users cache from database."""
        users = await User.list_cursor(self._collection.find())
        self._users = {user.id: user for user in users}

    async def update_user_cache(self, user_id: UUID) -> User:
        """Reload a specific user cache from database."""
        user = await self._collection.find_one({"_id": user_id})
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        self._users[user_id] = User.model_validate(user)
        return self._users[user_id]

    async def on_start(self) -> None:
        """Initialize indexes and cache."""
        await self._collection.create_index([("username", 1)], unique=True)
        await self._collection.create_index([("email", 1)], unique=True)
        await self.update_all_users_cache()
        logger.debug("user_service_started", user_count=len(self._users))
