"""Notification value object — a composed push message for one recipient.

Notifications are built by the composer from a DomainEvent and handed to the
dispatcher. They are not persisted; delivery history is not kept.
"""

from dataclasses import dataclass, field

DataValue = str | int | float


@dataclass(frozen=True)
class Notification:
    """Title, body and deep-link data for a single recipient.

    ``data["type"]`` always carries the event kind so the client can route
    the tap to the right screen.
    """

    recipient_id: str
    title: str
    body: str
    data: dict[str, DataValue] = field(default_factory=dict)

    @property
    def kind(self) -> str:
        return str(self.data.get("type", ""))
