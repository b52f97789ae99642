from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from reelforum.app import App
from reelforum.core.modules.session.models import AuthToken
from reelforum.errors import AuthenticationError

bearer_scheme = HTTPBearer(auto_error=False)
cookie_scheme = APIKeyCookie(name="auth_token", auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


AppDep = Annotated[App, Depends(get_app)]


async def get_auth_token(
    app: AppDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
    token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> AuthToken:
    """First valid token of the Authorization header (API clients) and the cookie (browsers)."""
    candidates = [credentials.credentials if credentials else None, token_cookie]
    for candidate in candidates:
        if candidate and await app.is_auth_token_valid(AuthToken(candidate)):
            return AuthToken(candidate)
    raise AuthenticationError("No valid token in Authorization header or cookie")


AuthTokenDep = Annotated[AuthToken, Depends(get_auth_token)]
