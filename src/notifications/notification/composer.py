"""Notification composer — pure mapping from DomainEvent to Notification.

No I/O happens here and nothing is read from the environment: display names
are resolved by the caller and carried on the event, and the caller supplies
the clock reading and zone used to render timestamps.
"""

from datetime import datetime, tzinfo

from notifications.notification.formatting import format_relative
from notifications.notification.notification import Notification
from notifications.notification.recipients import FALLBACK_NAME
from notifications.templates import get_template
from shared.events.coaching import DomainEvent


def compose(event: DomainEvent, *, now: datetime, tz: tzinfo) -> Notification:
    template_cls = get_template(event.kind.value)

    context = {
        "actor_name": event.actor_name or FALLBACK_NAME,
        "description": event.description,
        "reason": event.reason,
        "when": format_relative(event.scheduled_at, now, tz) if event.scheduled_at else None,
        "amount": event.amount,
        "currency": event.currency,
        "sessions": event.sessions,
    }
    rendered = template_cls.render(context)

    data: dict = {"type": event.kind.value}
    if template_cls.entity_key and event.entity_id:
        data[template_cls.entity_key] = event.entity_id
    if event.actor_id:
        data["actorId"] = event.actor_id

    return Notification(
        recipient_id=event.recipient_id,
        title=rendered["title"],
        body=rendered["body"],
        data=data,
    )
