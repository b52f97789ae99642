from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from uuid import UUID

from reelforum.config import Config
from reelforum.core.core import Core
from reelforum.core.modules.comment.tree import CommentTree
from reelforum.core.modules.session.models import AuthToken
from reelforum.core.modules.thread.models import Thread, ThreadPage
from reelforum.core.modules.user.models import UserView
from reelforum.errors import AuthenticationError


class App:
    """Facade for all application operations, resolves the requester before delegating to Core."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Auth ===
    async def is_auth_token_valid(self, auth_token: AuthToken) -> bool:
        return await self._core.services.session.is_auth_token_valid(auth_token)

    async def signup(
        self, username: str, password: str, email: str, first_name: str = "", last_name: str = ""
    ) -> tuple[AuthToken, UserView]:
        """Register a user and open a session for them."""
        user = await self._core.services.user.create_user(username, password, email, first_name, last_name)
        token = await self._core.services.session.create_session(user.id)
        return token, UserView.from_domain(user)

    async def login(self, username: str, password: str) -> AuthToken:
        """Authenticate user and create session."""
        if not self._core.services.user.verify_password(username, password):
            raise AuthenticationError("Invalid username or password")
        user = self._core.services.user.get_user_by_username(username)
        return await self._core.services.session.create_session(user.id)

    async def logout(self, auth_token: AuthToken) -> None:
        await self._core.services.access.ensure_authenticated(auth_token)
        await self._core.services.session.invalidate_session(auth_token)

    async def get_current_user(self, auth_token: AuthToken) -> UserView:
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        return UserView.from_domain(current_user)

    # === Threads ===
    async def list_threads(self, limit: int = 50, offset: int = 0) -> ThreadPage:
        """List threads, newest first (public)."""
        return await self._core.services.thread.list_threads(limit, offset)

    async def get_thread(self, thread_id: UUID) -> Thread:
        """Get a thread and count the view (public)."""
        return await self._core.services.thread.record_view(thread_id)

    async def create_thread(self, auth_token: AuthToken, title: str, content: str) -> Thread:
        """Start a thread authored by the current user."""
        author = await self._core.services.access.get_requester(auth_token)
        return await self._core.services.thread.create_thread(author, title, content)

    # === Comments ===
    async def get_comments(self, thread_id: UUID) -> CommentTree:
        """Get the full comment tree of a thread (public)."""
        return await self._core.services.comment.get_comments(thread_id)

    async def create_comment(self, auth_token: AuthToken, thread_id: UUID, content: str) -> Thread:
        """Post a top-level comment as the current user."""
        author = await self._core.services.access.get_requester(auth_token)
        return await self._core.services.comment.insert_top_level(thread_id, author, content)

    async def reply_to_comment(self, auth_token: AuthToken, thread_id: UUID, comment_id: UUID, content: str) -> Thread:
        """Reply to a comment at any depth as the current user."""
        author = await self._core.services.access.get_requester(auth_token)
        return await self._core.services.comment.insert_reply(thread_id, comment_id, author, content)

    async def edit_comment(self, auth_token: AuthToken, thread_id: UUID, comment_id: UUID, content: str) -> Thread:
        """Edit a comment (its author only)."""
        requester = await self._core.services.access.get_requester(auth_token)
        return await self._core.services.comment.edit_comment(thread_id, comment_id, requester, content)

    async def delete_comment(self, auth_token: AuthToken, thread_id: UUID, comment_id: UUID) -> Thread:
        """Soft-delete a comment (its author only)."""
        requester = await self._core.services.access.get_requester(auth_token)
        return await self._core.services.comment.delete_comment(thread_id, comment_id, requester)
