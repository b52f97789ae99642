from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class ParentNotFoundError(NotFoundError):
    """Raised when a reply targets a parent comment that is not in the thread."""

    def __init__(self, message: str = "Parent comment not found") -> None:
        super().__init__(message)


class CommentNotFoundError(NotFoundError):
    """Raised when an edit or delete targets a comment that is not in the thread."""

    def __init__(self, message: str = "Comment not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when a user tries to access a resource they do not have permission for."""


class UnauthorizedError(AccessDeniedError):
    """Raised when the requester is not the author of the comment they try to change."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ConflictError(UserError):
    """Raised when a write collides with existing or concurrently modified data."""


class ValidationError(UserError):
    """Raised when user input fails validation."""
