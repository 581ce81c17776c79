import datetime as dt


def utc_now() -> dt.datetime:
    """
    Get current UTC datetime with timezone information.

    Returns:
        dt.datetime: Current UTC datetime with timezone awareness
    """
    return dt.datetime.now(dt.timezone.utc)


def as_utc(value: dt.datetime) -> dt.datetime:
    # Naive values coming back from the database are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def to_iso(value: dt.datetime | None) -> str | None:
    """Format as ISO-8601 UTC with millisecond precision, e.g. 2026-01-02T03:04:05.678Z."""
    if value is None:
        return None
    return as_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")
