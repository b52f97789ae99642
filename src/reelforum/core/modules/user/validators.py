import re

from reelforum.errors import ValidationError

USERNAME_RE = re.compile(r"^[A-Za-z0-9_.-]{2,32}$")


def validate_username(username: str) -> None:
    """Usernames become comment authors, so they must be non-empty and printable.

    Raises:
        ValidationError: If the username has disallowed characters or length
    """
    if not USERNAME_RE.fullmatch(username):
        raise ValidationError("Username must be 2-32 characters: letters, digits, '_', '.', '-'")


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - No whitespace characters
    - Minimum length of 8 characters

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if len(password) < 8:
        raise ValidationError("Password must be at least 8 characters long")

    if any(char.isspace() for char in password):
        raise ValidationError("Password cannot contain whitespace characters")
