"""Meal logged template — sent to the trainer of an assigned client."""

from shared.events.coaching import EventKind


class MealLoggedTemplate:
    notification_type = EventKind.MEAL_LOGGED.value
    entity_key = "mealId"

    @staticmethod
    def render(context: dict) -> dict:
        client = context["actor_name"]
        meal = context.get("description")
        body = f"{client} logged a meal"
        if meal:
            body += f": {meal}"
        return {"title": "Meal Logged", "body": body}
