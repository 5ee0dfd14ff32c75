"""Workout assigned template — sent to a client when a trainer assigns a workout."""

from shared.events.coaching import EventKind


class WorkoutAssignedTemplate:
    notification_type = EventKind.WORKOUT_ASSIGNED.value
    entity_key = "workoutId"

    @staticmethod
    def render(context: dict) -> dict:
        trainer = context["actor_name"]
        workout = context.get("description")
        body = f"{trainer} assigned you a new workout"
        if workout:
            body += f": {workout}"
        return {"title": "New Workout Assigned", "body": body}
