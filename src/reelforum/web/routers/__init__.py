from reelforum.web.routers.auth import router as auth_router
from reelforum.web.routers.comments import router as comments_router
from reelforum.web.routers.profile import router as profile_router
from reelforum.web.routers.threads import router as threads_router

__all__ = [
    "auth_router",
    "comments_router",
    "profile_router",
    "threads_router",
]
