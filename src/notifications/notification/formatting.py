"""Relative date rendering for notification bodies.

Times are shown in the app's fixed time zone: ``today at 14:30`` when the
timestamp falls on the current calendar day there, ``10/21/2026 at 14:30``
otherwise.
"""

from datetime import UTC, datetime, tzinfo


def coerce_datetime(value) -> datetime | None:
    """Normalize a stored or transported timestamp to an aware datetime.

    Accepts datetimes (naive ones are taken as UTC), ISO-8601 strings, epoch
    seconds, and the ``{"_seconds": ..., "_nanoseconds": ...}`` shape that
    Firestore timestamps take when serialized to JSON.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)):
        dt = datetime.fromtimestamp(value, UTC)
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value)
    elif isinstance(value, dict) and "_seconds" in value:
        seconds = value["_seconds"] + value.get("_nanoseconds", 0) / 1_000_000_000
        dt = datetime.fromtimestamp(seconds, UTC)
    else:
        raise TypeError(f"Cannot interpret {type(value).__name__} as a timestamp")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def format_relative(when: datetime, now: datetime, tz: tzinfo) -> str:
    local = when.astimezone(tz)
    clock = local.strftime("%H:%M")
    if local.date() == now.astimezone(tz).date():
        return f"today at {clock}"
    return f"{local.month}/{local.day}/{local.year} at {clock}"
