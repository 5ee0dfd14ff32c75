"""Shared plumbing for notification trigger handlers.

Provides the common pattern: derive a DomainEvent → compose → dispatch, plus
the before/after diff helpers the update handlers rely on.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime, tzinfo

from notifications.notification.composer import compose
from notifications.notification.dispatch import DispatchResult, Dispatcher
from notifications.notification.recipients import RecipientResolver
from runtime.platform import ChangeEvent
from shared.clock import utc_now
from shared.config import get_settings
from shared.events.coaching import DomainEvent
from shared.store import Document, DocumentStore, Filter


class NotificationHandler:
    """Base class for handlers that turn changes into push notifications."""

    def __init__(
        self,
        store: DocumentStore,
        dispatcher: Dispatcher,
        resolver: RecipientResolver | None = None,
        clock: Callable[[], datetime] = utc_now,
        tz: tzinfo | None = None,
    ) -> None:
        self.store = store
        self.dispatcher = dispatcher
        self.resolver = resolver or dispatcher.resolver
        self.clock = clock
        self.tz = tz or get_settings().tz

    async def name_of(self, user_id: str | None) -> str:
        return await asyncio.to_thread(self.resolver.resolve_display_name, user_id)

    async def fetch(self, collection: str, document_id: str) -> dict | None:
        """Read one document without blocking the event loop."""
        return await asyncio.to_thread(self.store.get, collection, document_id)

    async def find(self, collection: str, filters: list[Filter], limit: int | None = None) -> list[Document]:
        """Run a store query without blocking the event loop."""
        return await asyncio.to_thread(self.store.query, collection, filters, limit)

    async def notify(self, event: DomainEvent) -> DispatchResult:
        notification = compose(event, now=self.clock(), tz=self.tz)
        return await self.dispatcher.dispatch(event.recipient_id, notification)


def transitioned_to(change: ChangeEvent, field: str, value: str) -> bool:
    """True when ``field`` moved from anything else to ``value`` in this change."""
    before = change.before or {}
    return before.get(field) != value and change.after.get(field) == value


def first_present(document: dict, *fields: str) -> str | None:
    for name in fields:
        value = document.get(name)
        if value:
            return str(value)
    return None
