from reelforum.core.modules.session.models import AuthToken
from reelforum.core.modules.user.models import User
from reelforum.core.service import Service


class AccessService(Service):
    """Turns a session token into the requester identity used by the comment tree."""

    async def ensure_authenticated(self, auth_token: AuthToken) -> User:
        """Ensure the user is authenticated."""
        return await self.services.session.get_authenticated_user(auth_token)

    async def get_requester(self, auth_token: AuthToken) -> str:
        """Username of the authenticated user, as recorded on comments they author."""
        user = await self.ensure_authenticated(auth_token)
        return user.username
