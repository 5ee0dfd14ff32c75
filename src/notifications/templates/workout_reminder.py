"""Workout reminder template — evening nudge for workouts still open today."""

from shared.events.coaching import EventKind


class WorkoutReminderTemplate:
    notification_type = EventKind.WORKOUT_REMINDER.value
    entity_key = "workoutId"

    @staticmethod
    def render(context: dict) -> dict:
        workout = context.get("description") or "your workout"
        return {
            "title": "Workout Reminder",
            "body": f"Don't forget to complete {workout} today!",
        }
