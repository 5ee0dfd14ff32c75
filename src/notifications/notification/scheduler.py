"""Scheduled reminder jobs.

Two jobs query the store for upcoming work and push reminders through the
same compose/dispatch path as the change-feed handlers:

- ``session-reminders`` (every 15 minutes): sessions starting 15 to 30
  minutes from now; one reminder to the client and one to the trainer.
- ``workout-reminders`` (daily at 19:00): workouts scheduled for today that
  are still open; one reminder to the client.

Matches are reminded concurrently and one failing match never aborts the
batch. Reminders are not deduplicated: a re-run inside the same window sends
them again.
"""

import asyncio
from datetime import datetime, timedelta

import structlog

from notifications.notification.formatting import coerce_datetime
from notifications.notification.helpers import NotificationHandler, first_present
from runtime.platform import EventPlatform, HandlerOutcome, best_effort
from shared.config import SESSION_REMINDER_SCHEDULE, WORKOUT_REMINDER_SCHEDULE
from shared.events.coaching import DomainEvent, EventKind
from shared.store import Document, Filter
from shared.store.collections import ASSIGNED_WORKOUTS, SESSIONS

logger = structlog.get_logger(__name__)

SESSION_WINDOW_START = timedelta(minutes=15)
SESSION_WINDOW_END = timedelta(minutes=30)
OPEN_WORKOUT_STATUSES = ["assigned", "scheduled"]
QUERY_LIMIT = 500


class ReminderJobs(NotificationHandler):
    def register(self, platform: EventPlatform) -> None:
        platform.on_schedule("session-reminders", SESSION_REMINDER_SCHEDULE, self.send_session_reminders)
        platform.on_schedule("workout-reminders", WORKOUT_REMINDER_SCHEDULE, self.send_workout_reminders)

    @best_effort
    async def send_session_reminders(self) -> None:
        now = self.clock()
        sessions = await self.find(
            SESSIONS,
            [
                Filter("status", "==", "scheduled"),
                Filter("startTime", ">=", now + SESSION_WINDOW_START),
                Filter("startTime", "<=", now + SESSION_WINDOW_END),
            ],
            limit=QUERY_LIMIT,
        )
        outcomes = await asyncio.gather(*(self._remind_session(s) for s in sessions))
        _log_batch("session-reminders", outcomes, now)

    @best_effort
    async def send_workout_reminders(self) -> None:
        now = self.clock()
        start_of_day = now.astimezone(self.tz).replace(hour=0, minute=0, second=0, microsecond=0)
        end_of_day = start_of_day + timedelta(days=1)

        workouts = await self.find(
            ASSIGNED_WORKOUTS,
            [
                Filter("status", "in", OPEN_WORKOUT_STATUSES),
                Filter("scheduledDate", ">=", start_of_day),
                Filter("scheduledDate", "<", end_of_day),
            ],
            limit=QUERY_LIMIT,
        )
        outcomes = await asyncio.gather(*(self._remind_workout(w) for w in workouts))
        _log_batch("workout-reminders", outcomes, now)

    @best_effort
    async def _remind_session(self, session: Document) -> None:
        client_id = session.data.get("clientId")
        trainer_id = session.data.get("trainerId")
        starts_at = coerce_datetime(session.data.get("startTime"))

        pairs = [(r, o) for r, o in ((client_id, trainer_id), (trainer_id, client_id)) if r]
        names = await asyncio.gather(*(self.name_of(other_id) for _, other_id in pairs))
        events = [
            DomainEvent(
                kind=EventKind.SESSION_REMINDER,
                recipient_id=recipient_id,
                actor_id=other_id,
                actor_name=name,
                entity_id=session.id,
                scheduled_at=starts_at,
            )
            for (recipient_id, other_id), name in zip(pairs, names)
        ]
        await asyncio.gather(*(self.notify(event) for event in events))

    @best_effort
    async def _remind_workout(self, workout: Document) -> None:
        client_id = workout.data.get("clientId")
        if not client_id:
            return
        await self.notify(
            DomainEvent(
                kind=EventKind.WORKOUT_REMINDER,
                recipient_id=client_id,
                actor_id=workout.data.get("trainerId"),
                entity_id=workout.id,
                description=first_present(workout.data, "name", "title"),
            )
        )


def _log_batch(job: str, outcomes: list[HandlerOutcome], now: datetime) -> None:
    failed = sum(1 for outcome in outcomes if not outcome.ok)
    logger.info(
        "Reminder job processed",
        job=job,
        matched=len(outcomes),
        failed=failed,
        as_of=now.isoformat(),
    )
