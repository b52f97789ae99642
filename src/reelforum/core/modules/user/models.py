from uuid import UUID

from pydantic import BaseModel, Field

from reelforum.core.db import MongoModel


class User(MongoModel):
    """Forum member with credentials."""

    username: str
    email: str
    first_name: str = ""
    last_name: str = ""
    password_hash: str  # bcrypt hash


class UserView(BaseModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    username: str = Field(..., description="Username, shown as comment author")
    email: str = Field(..., description="Email address")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
        )
