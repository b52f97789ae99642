"""Login sessions.

Only a SHA-256 digest of each token is stored, so a leaked sessions
collection cannot be replayed as bearer tokens.
"""

import hashlib
from datetime import datetime
from typing import NewType
from uuid import UUID

from pydantic import Field

from reelforum.core.db import MongoModel
from reelforum.utils import now

AuthToken = NewType("AuthToken", str)

SESSION_TTL_SECONDS = 30 * 24 * 60 * 60


def hash_token(auth_token: AuthToken) -> str:
    return hashlib.sha256(auth_token.encode("utf-8")).hexdigest()


class Session(MongoModel):
    """Indexed on token_hash (unique), user_id, and created_at with a 30 day TTL."""

    user_id: UUID
    token_hash: str
    created_at: datetime = Field(default_factory=now)
