from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware current time in UTC; default for record timestamps."""
    return datetime.now(timezone.utc)
