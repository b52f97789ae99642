"""Comment tree endpoints.

Mutating endpoints return the whole updated thread so clients can re-render
the tree without a second request.
"""

from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from reelforum.core.modules.comment.tree import CommentTree
from reelforum.core.modules.thread.models import Thread
from reelforum.web.deps import AppDep, AuthTokenDep
from reelforum.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["comments"])


class CommentRequest(BaseModel):
    """Request carrying comment text."""

    content: str = Field(..., description="The comment text", min_length=1)


@router.get(
    "/threads/{thread_id}/comments",
    summary="Get comment tree",
    description="Get every comment of a thread with nested replies. Deleted comments appear with an empty author.",
    operation_id="getComments",
    responses={
        200: {"description": "Comment tree"},
        404: {"model": ErrorResponse, "description": "Thread not found"},
    },
)
async def get_comments(thread_id: UUID, app: AppDep) -> CommentTree:
    return await app.get_comments(thread_id)


@router.post(
    "/threads/{thread_id}/comments",
    summary="Create comment",
    description="Add a top-level comment to a thread.",
    operation_id="createComment",
    status_code=201,
    responses={
        201: {"description": "Comment created, updated thread returned"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Thread not found"},
        409: {"model": ErrorResponse, "description": "Thread modified concurrently"},
    },
)
async def create_comment(thread_id: UUID, request: CommentRequest, app: AppDep, auth_token: AuthTokenDep) -> Thread:
    return await app.create_comment(auth_token, thread_id, request.content)


@router.post(
    "/threads/{thread_id}/comments/{comment_id}/replies",
    summary="Reply to comment",
    description="Add a reply under any comment of the thread, at any depth.",
    operation_id="replyToComment",
    status_code=201,
    responses={
        201: {"description": "Reply created, updated thread returned"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Thread or parent comment not found"},
        409: {"model": ErrorResponse, "description": "Thread modified concurrently"},
    },
)
async def reply_to_comment(
    thread_id: UUID, comment_id: UUID, request: CommentRequest, app: AppDep, auth_token: AuthTokenDep
) -> Thread:
    return await app.reply_to_comment(auth_token, thread_id, comment_id, request.content)


@router.patch(
    "/threads/{thread_id}/comments/{comment_id}",
    summary="Edit comment",
    description="Replace the text of a comment. Only its author may edit it.",
    operation_id="editComment",
    responses={
        200: {"description": "Comment edited, updated thread returned"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Not the author of the comment"},
        404: {"model": ErrorResponse, "description": "Thread or comment not found"},
        409: {"model": ErrorResponse, "description": "Thread modified concurrently"},
    },
)
async def edit_comment(
    thread_id: UUID, comment_id: UUID, request: CommentRequest, app: AppDep, auth_token: AuthTokenDep
) -> Thread:
    return await app.edit_comment(auth_token, thread_id, comment_id, request.content)


@router.delete(
    "/threads/{thread_id}/comments/{comment_id}",
    summary="Delete comment",
    description=(
        "Soft-delete a comment: its author is cleared and its text replaced with 'Comment was deleted'. "
        "Replies stay in place. Only its author may delete it."
    ),
    operation_id="deleteComment",
    responses={
        200: {"description": "Comment deleted, updated thread returned"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Not the author of the comment"},
        404: {"model": ErrorResponse, "description": "Thread or comment not found"},
        409: {"model": ErrorResponse, "description": "Thread modified concurrently"},
    },
)
async def delete_comment(thread_id: UUID, comment_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> Thread:
    return await app.delete_comment(auth_token, thread_id, comment_id)
