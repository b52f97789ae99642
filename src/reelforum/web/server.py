from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reelforum.app import App
from reelforum.config import Config
from reelforum.errors import UserError
from reelforum.web.error_handlers import general_exception_handler, user_error_handler
from reelforum.web.openapi import set_custom_openapi
from reelforum.web.routers import auth_router, comments_router, profile_router, threads_router

API_PREFIX = "/api/v1"
ROUTERS = (auth_router, profile_router, threads_router, comments_router)


def create_fastapi_app(forum: App, config: Config) -> FastAPI:
    """Build the forum API around an App instance."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        app.state.app = forum
        async with forum.lifespan():
            yield

    app = FastAPI(title="ReelForum API", lifespan=lifespan)

    # Browser clients on the frontend origin send the auth_token cookie
    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PATCH", "DELETE"],
            allow_headers=["Authorization", "Content-Type"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    for router in ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
    set_custom_openapi(app)
    return app
