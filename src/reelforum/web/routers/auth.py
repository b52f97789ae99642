from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from reelforum.core.modules.session.models import SESSION_TTL_SECONDS, AuthToken
from reelforum.core.modules.user.models import UserView
from reelforum.web.deps import AppDep, AuthTokenDep
from reelforum.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class SignupRequest(BaseModel):
    """Registration request."""

    first_name: str = Field("", description="First name")
    last_name: str = Field("", description="Last name")
    email: str = Field(..., min_length=3, description="Email address, unique per user")
    username: str = Field(..., min_length=1, description="Username, unique per user")
    password: str = Field(..., min_length=1, description="Password")


class SignupResponse(BaseModel):
    """Registration response."""

    token: str = Field(..., description="Authentication token for subsequent requests")
    user: UserView = Field(..., description="The registered user")


class LoginRequest(BaseModel):
    """Authentication request."""

    username: str = Field(..., description="Username for authentication")
    password: str = Field(..., description="Password for authentication")


class LoginResponse(BaseModel):
    """Authentication response."""

    token: str = Field(..., description="Authentication token for subsequent requests")


def set_auth_cookie(response: Response, token: AuthToken) -> None:
    """Set the token cookie for browser-based clients."""
    response.set_cookie(
        key="auth_token",
        value=token,
        httponly=True,
        samesite="lax",
        secure=False,  # Set to True in production with HTTPS
        max_age=SESSION_TTL_SECONDS,
    )


@router.post(
    "/auth/signup",
    summary="Register user",
    description="Create an account and receive an authentication token.",
    operation_id="signup",
    status_code=201,
    responses={
        201: {"description": "User registered"},
        400: {"model": ErrorResponse, "description": "Invalid username or password"},
        409: {"model": ErrorResponse, "description": "Email or username already exists"},
    },
)
async def signup(request: SignupRequest, app: AppDep, response: Response) -> SignupResponse:
    token, user = await app.signup(request.username, request.password, request.email, request.first_name, request.last_name)
    set_auth_cookie(response, token)
    return SignupResponse(token=token, user=user)


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with username and password to receive an authentication token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(login_data: LoginRequest, app: AppDep, response: Response) -> LoginResponse:
    token = await app.login(login_data.username, login_data.password)
    set_auth_cookie(response, token)
    return LoginResponse(token=token)


@router.post(
    "/auth/logout",
    summary="End session",
    description="Invalidate the current authentication session.",
    operation_id="logout",
    status_code=204,
    responses={
        204: {"description": "Successfully logged out"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def logout(app: AppDep, auth_token: AuthTokenDep, response: Response) -> None:
    await app.logout(auth_token)
    response.delete_cookie("auth_token")
