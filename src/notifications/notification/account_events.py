"""Trigger handler for account status changes (trainer/client approval)."""

import structlog

from notifications.notification.helpers import NotificationHandler
from runtime.platform import ChangeEvent, EventPlatform, best_effort
from shared.events.coaching import DomainEvent, EventKind
from shared.store.collections import USERS

logger = structlog.get_logger(__name__)

_STATUS_EVENTS = {
    "approved": EventKind.ACCOUNT_APPROVED,
    "rejected": EventKind.ACCOUNT_REJECTED,
}


class AccountEventsHandler(NotificationHandler):
    def register(self, platform: EventPlatform) -> None:
        platform.on_update(USERS, self.on_account_status_changed)

    @best_effort
    async def on_account_status_changed(self, change: ChangeEvent) -> None:
        before_status = (change.before or {}).get("status")
        after_status = change.after.get("status")
        if before_status == after_status:
            return

        kind = _STATUS_EVENTS.get(after_status)
        if kind is None:
            logger.debug(
                "Account status change not notified",
                user_id=change.document_id,
                status=after_status,
            )
            return

        await self.notify(
            DomainEvent(
                kind=kind,
                recipient_id=change.document_id,
                entity_id=change.document_id,
                reason=change.after.get("rejectionReason") if kind is EventKind.ACCOUNT_REJECTED else None,
            )
        )
