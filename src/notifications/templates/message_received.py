"""Message received template — the body is a preview of the message text."""

from shared.events.coaching import EventKind

PREVIEW_LENGTH = 100


class MessageReceivedTemplate:
    notification_type = EventKind.MESSAGE_RECEIVED.value
    entity_key = "conversationId"

    @staticmethod
    def render(context: dict) -> dict:
        sender = context["actor_name"]
        text = (context.get("description") or "").strip()
        if len(text) > PREVIEW_LENGTH:
            text = text[: PREVIEW_LENGTH - 1].rstrip() + "…"
        return {
            "title": f"New message from {sender}",
            "body": text or "Sent you a message",
        }
