from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from reelforum.core.modules.thread.models import Thread, ThreadPage
from reelforum.web.deps import AppDep, AuthTokenDep
from reelforum.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["threads"])


class CreateThreadRequest(BaseModel):
    """Request to start a new thread."""

    title: str = Field(..., min_length=1, description="Thread title")
    content: str = Field(..., min_length=1, description="Opening post text")

    model_config = {
        "json_schema_extra": {"examples": [{"title": "Best trails near Portland?", "content": "Looking for day hikes."}]}
    }


@router.get(
    "/threads",
    summary="List threads",
    description="Get a page of thread summaries (without comments), newest first.",
    operation_id="listThreads",
    responses={200: {"description": "Paginated list of threads"}},
)
async def list_threads(
    app: AppDep,
    limit: Annotated[int, Query(ge=1, le=200, description="Maximum items to return")] = 50,
    offset: Annotated[int, Query(ge=0, description="Number of items to skip")] = 0,
) -> ThreadPage:
    return await app.list_threads(limit, offset)


@router.get(
    "/threads/{thread_id}",
    summary="Get thread",
    description="Get a thread with its whole comment tree. Each call counts as one view.",
    operation_id="getThread",
    responses={
        200: {"description": "Thread details"},
        404: {"model": ErrorResponse, "description": "Thread not found"},
    },
)
async def get_thread(thread_id: UUID, app: AppDep) -> Thread:
    return await app.get_thread(thread_id)


@router.post(
    "/threads",
    summary="Create thread",
    description="Start a new thread authored by the current user.",
    operation_id="createThread",
    status_code=201,
    responses={
        201: {"description": "Thread created"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_thread(request: CreateThreadRequest, app: AppDep, auth_token: AuthTokenDep) -> Thread:
    return await app.create_thread(auth_token, request.title, request.content)
