"""Trigger handlers for assigned workouts.

A new workout notifies the client. A workout moving to ``completed``
notifies the trainer; redelivered or unrelated updates are ignored.
"""

import structlog

from notifications.notification.helpers import (
    NotificationHandler,
    first_present,
    transitioned_to,
)
from runtime.platform import ChangeEvent, EventPlatform, best_effort
from shared.events.coaching import DomainEvent, EventKind
from shared.store.collections import ASSIGNED_WORKOUTS

logger = structlog.get_logger(__name__)

COMPLETED = "completed"


class WorkoutEventsHandler(NotificationHandler):
    """Reacts to workout documents to notify clients and trainers."""

    def register(self, platform: EventPlatform) -> None:
        platform.on_create(ASSIGNED_WORKOUTS, self.on_workout_assigned)
        platform.on_update(ASSIGNED_WORKOUTS, self.on_workout_updated)

    @best_effort
    async def on_workout_assigned(self, change: ChangeEvent) -> None:
        workout = change.after
        client_id = workout.get("clientId")
        if not client_id:
            logger.info("Workout has no client, skipping", workout_id=change.document_id)
            return

        trainer_id = workout.get("trainerId")
        await self.notify(
            DomainEvent(
                kind=EventKind.WORKOUT_ASSIGNED,
                recipient_id=client_id,
                actor_id=trainer_id,
                actor_name=await self.name_of(trainer_id),
                entity_id=change.document_id,
                description=first_present(workout, "name", "title"),
            )
        )

    @best_effort
    async def on_workout_updated(self, change: ChangeEvent) -> None:
        if not transitioned_to(change, "status", COMPLETED):
            return

        workout = change.after
        trainer_id = workout.get("trainerId")
        if not trainer_id:
            logger.info("Completed workout has no trainer, skipping", workout_id=change.document_id)
            return

        client_id = workout.get("clientId")
        await self.notify(
            DomainEvent(
                kind=EventKind.WORKOUT_COMPLETED,
                recipient_id=trainer_id,
                actor_id=client_id,
                actor_name=await self.name_of(client_id),
                entity_id=change.document_id,
                description=first_present(workout, "name", "title"),
            )
        )
