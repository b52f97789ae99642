from datetime import UTC, datetime


def now() -> datetime:
    return datetime.now(UTC)


def format_display_date(value: datetime) -> str:
    """Render a date the way the forum shows it, e.g. 'October 19, 2026'."""
    return f"{value:%B} {value.day}, {value.year}"
