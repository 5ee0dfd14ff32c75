"""Workout completed template — sent to the trainer when a client finishes a workout."""

from shared.events.coaching import EventKind


class WorkoutCompletedTemplate:
    notification_type = EventKind.WORKOUT_COMPLETED.value
    entity_key = "workoutId"

    @staticmethod
    def render(context: dict) -> dict:
        client = context["actor_name"]
        workout = context.get("description") or "a workout"
        return {"title": "Workout Completed", "body": f"{client} completed {workout}"}
