"""Parsing helpers for user-supplied task fields."""

from datetime import datetime, timezone

from redtask.models import Priority

DUE_DATE_FORMAT = "%d/%m/%Y"

PRIORITY_ALIASES = {
    "now": Priority.NOW,
    "n": Priority.NOW,
    "high": Priority.HIGH,
    "h": Priority.HIGH,
    "low": Priority.LOW,
    "l": Priority.LOW,
}


def get_priority_or_default(priority: str | None) -> Priority:
    """Map a priority name or alias to Priority; anything else is Low."""
    if priority is None:
        return Priority.LOW
    return PRIORITY_ALIASES.get(priority.strip().lower(), Priority.LOW)


def parse_date_from_str(date_str: str) -> datetime:
    """Parse ``DD/MM/YYYY`` into midnight UTC. Raises ValueError."""
    naive = datetime.strptime(date_str.strip(), DUE_DATE_FORMAT)
    return naive.replace(tzinfo=timezone.utc)


def get_due_or_default(due: str | None) -> datetime | None:
    if not due:
        return None
    try:
        return parse_date_from_str(due)
    except ValueError:
        return None


def get_tags_or_default(tags: str | None) -> list[str]:
    """Split a comma-separated tag string, dropping blanks."""
    if not tags:
        return []
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


def format_time_difference(start: datetime, end: datetime) -> str:
    """Compact age such as ``3h``, ``12m`` or ``40s``."""
    seconds = int((end - start).total_seconds())
    if seconds >= 3600:
        return f"{seconds // 3600}h"
    if seconds >= 60:
        return f"{seconds // 60}m"
    return f"{seconds}s"
