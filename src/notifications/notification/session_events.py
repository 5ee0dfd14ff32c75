"""Trigger handlers for training sessions.

Bookings and cancellations are routed to the counterpart of whoever made the
change: if the trainer acted, the client hears about it, and vice versa.
"""

from datetime import datetime

import structlog

from notifications.notification.formatting import coerce_datetime
from notifications.notification.helpers import NotificationHandler, transitioned_to
from runtime.platform import ChangeEvent, EventPlatform, best_effort
from shared.events.coaching import DomainEvent, EventKind
from shared.store.collections import SESSIONS

logger = structlog.get_logger(__name__)

CANCELLED = "cancelled"


def start_time(session: dict, session_id: str) -> datetime | None:
    """Return the session start as a datetime, or None when it is unreadable.

    A malformed value only drops the time from the message.
    """
    try:
        return coerce_datetime(session.get("startTime"))
    except (TypeError, ValueError) as exc:
        logger.warning("Unreadable session start time, omitting it", session_id=session_id, error=str(exc))
        return None


def counterpart(session: dict, actor_id: str) -> str | None:
    """Return the other party of the session relative to ``actor_id``."""
    if actor_id == session.get("clientId"):
        return session.get("trainerId")
    return session.get("clientId")


class SessionEventsHandler(NotificationHandler):
    """Reacts to session documents to notify the other participant."""

    def register(self, platform: EventPlatform) -> None:
        platform.on_create(SESSIONS, self.on_session_booked)
        platform.on_update(SESSIONS, self.on_session_updated)

    @best_effort
    async def on_session_booked(self, change: ChangeEvent) -> None:
        session = change.after
        # Clients book far more often than trainers; assume the client booked
        booked_by = session.get("createdBy") or session.get("clientId")
        recipient_id = counterpart(session, booked_by)
        if not recipient_id:
            logger.info("Session has no counterpart, skipping", session_id=change.document_id)
            return

        await self.notify(
            DomainEvent(
                kind=EventKind.SESSION_BOOKED,
                recipient_id=recipient_id,
                actor_id=booked_by,
                actor_name=await self.name_of(booked_by),
                entity_id=change.document_id,
                scheduled_at=start_time(session, change.document_id),
            )
        )

    @best_effort
    async def on_session_updated(self, change: ChangeEvent) -> None:
        if not transitioned_to(change, "status", CANCELLED):
            return

        session = change.after
        cancelled_by = session.get("lastModifiedBy") or session.get("trainerId")
        recipient_id = counterpart(session, cancelled_by)
        if not recipient_id:
            logger.info("Cancelled session has no counterpart, skipping", session_id=change.document_id)
            return

        await self.notify(
            DomainEvent(
                kind=EventKind.SESSION_CANCELLED,
                recipient_id=recipient_id,
                actor_id=cancelled_by,
                actor_name=await self.name_of(cancelled_by),
                entity_id=change.document_id,
                reason=session.get("cancellationReason"),
                scheduled_at=start_time(session, change.document_id),
            )
        )
