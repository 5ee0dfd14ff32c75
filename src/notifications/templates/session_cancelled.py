"""Session cancelled template — optional reason is appended when present."""

from shared.events.coaching import EventKind


class SessionCancelledTemplate:
    notification_type = EventKind.SESSION_CANCELLED.value
    entity_key = "sessionId"

    @staticmethod
    def render(context: dict) -> dict:
        canceller = context["actor_name"]
        when = context.get("when")
        reason = context.get("reason")

        body = f"{canceller} cancelled the session"
        if when:
            body += f" scheduled for {when}"
        if reason:
            body += f". Reason: {reason}"
        return {"title": "Session Cancelled", "body": body}
