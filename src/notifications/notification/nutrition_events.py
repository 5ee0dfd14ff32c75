"""Trigger handlers for nutrition plans and meal entries."""

import structlog

from notifications.notification.helpers import NotificationHandler, first_present
from runtime.platform import ChangeEvent, EventPlatform, best_effort
from shared.events.coaching import DomainEvent, EventKind
from shared.store.collections import MEAL_ENTRIES, NUTRITION_PLANS

logger = structlog.get_logger(__name__)


class NutritionEventsHandler(NotificationHandler):
    """Notifies clients of new plans and trainers of logged meals."""

    def register(self, platform: EventPlatform) -> None:
        platform.on_create(NUTRITION_PLANS, self.on_nutrition_plan_assigned)
        platform.on_create(MEAL_ENTRIES, self.on_meal_logged)

    @best_effort
    async def on_nutrition_plan_assigned(self, change: ChangeEvent) -> None:
        plan = change.after
        client_id = plan.get("clientId")
        if not client_id:
            logger.info("Nutrition plan has no client, skipping", plan_id=change.document_id)
            return

        trainer_id = plan.get("trainerId")
        await self.notify(
            DomainEvent(
                kind=EventKind.NUTRITION_PLAN_ASSIGNED,
                recipient_id=client_id,
                actor_id=trainer_id,
                actor_name=await self.name_of(trainer_id),
                entity_id=change.document_id,
                description=first_present(plan, "name", "title"),
            )
        )

    @best_effort
    async def on_meal_logged(self, change: ChangeEvent) -> None:
        meal = change.after
        trainer_id = meal.get("trainerId")
        # Clients without a trainer log meals for themselves only
        if not trainer_id:
            return

        client_id = meal.get("clientId")
        await self.notify(
            DomainEvent(
                kind=EventKind.MEAL_LOGGED,
                recipient_id=trainer_id,
                actor_id=client_id,
                actor_name=await self.name_of(client_id),
                entity_id=change.document_id,
                description=first_present(meal, "name", "description", "mealType"),
            )
        )
