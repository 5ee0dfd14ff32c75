"""Nutrition plan assigned template."""

from shared.events.coaching import EventKind


class NutritionPlanAssignedTemplate:
    notification_type = EventKind.NUTRITION_PLAN_ASSIGNED.value
    entity_key = "planId"

    @staticmethod
    def render(context: dict) -> dict:
        trainer = context["actor_name"]
        plan = context.get("description")
        body = f"{trainer} assigned you a nutrition plan"
        if plan:
            body += f": {plan}"
        return {"title": "New Nutrition Plan", "body": body}
