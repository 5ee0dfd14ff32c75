"""Wall clock used as the default ``clock`` collaborator."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)
