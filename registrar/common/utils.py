from datetime import datetime, timezone


def current_timestamp() -> datetime:
    """Get current UTC timestamp"""
    return datetime.now(timezone.utc)
