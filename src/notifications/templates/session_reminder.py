"""Session reminder template — sent 15 to 30 minutes before a session starts."""

from shared.events.coaching import EventKind


class SessionReminderTemplate:
    notification_type = EventKind.SESSION_REMINDER.value
    entity_key = "sessionId"

    @staticmethod
    def render(context: dict) -> dict:
        other = context["actor_name"]
        when = context.get("when") or "soon"
        return {
            "title": "Upcoming Session",
            "body": f"Your session with {other} starts {when}",
        }
