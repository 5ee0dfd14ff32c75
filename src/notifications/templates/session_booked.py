"""Session booked template — sent to the counterpart of whoever booked."""

from shared.events.coaching import EventKind


class SessionBookedTemplate:
    notification_type = EventKind.SESSION_BOOKED.value
    entity_key = "sessionId"

    @staticmethod
    def render(context: dict) -> dict:
        booker = context["actor_name"]
        when = context.get("when")
        body = f"{booker} booked a session"
        if when:
            body += f" for {when}"
        return {"title": "New Session Booked", "body": body}
