"""Payment webhook processing.

Each inbound call is either rejected (bad signature: HTTP 400, no writes) or
verified. A verified call is always acknowledged with HTTP 200, whatever
happens downstream, so the provider does not redeliver an event whose side
effects partially failed.

For ``payment_intent.succeeded`` three actions are attempted independently:
credit the session package, record payment history, notify the client. No
idempotency key is checked, so a replayed event credits and records again.
Ledger reads and writes run in worker threads.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, tzinfo

import structlog

from notifications.notification.composer import compose
from notifications.notification.dispatch import Dispatcher
from payments.gateway.port import PaymentGateway, WebhookVerificationError
from payments.payment.crediting import SessionPackageLedger
from shared.clock import utc_now
from shared.config import SESSIONS_PER_PACKAGE, get_settings
from shared.events.coaching import DomainEvent, EventKind
from shared.store import DocumentStore

_default_logger = structlog.get_logger(__name__)

PAYMENT_SUCCEEDED = "payment_intent.succeeded"
PAYMENT_FAILED = "payment_intent.payment_failed"


@dataclass(frozen=True)
class WebhookResponse:
    status_code: int
    body: dict | str


class WebhookProcessor:
    def __init__(
        self,
        gateway: PaymentGateway,
        store: DocumentStore,
        dispatcher: Dispatcher,
        ledger: SessionPackageLedger | None = None,
        clock: Callable[[], datetime] = utc_now,
        tz: tzinfo | None = None,
        sessions_per_package: int = SESSIONS_PER_PACKAGE,
        logger=None,
    ) -> None:
        self.gateway = gateway
        self.store = store
        self.dispatcher = dispatcher
        self.ledger = ledger or SessionPackageLedger(store, clock=clock)
        self.clock = clock
        self.tz = tz or get_settings().tz
        self.sessions_per_package = sessions_per_package
        self.logger = logger or _default_logger

    async def process(self, payload: bytes, signature: str) -> WebhookResponse:
        try:
            event = self.gateway.construct_event(payload, signature)
        except WebhookVerificationError as exc:
            self.logger.error("Webhook signature verification failed", error=str(exc))
            return WebhookResponse(status_code=400, body=f"Webhook Error: {exc}")

        try:
            if event.type == PAYMENT_SUCCEEDED:
                await self.on_payment_succeeded(event.data)
            elif event.type == PAYMENT_FAILED:
                self.logger.info("Payment failed", payment_intent_id=event.data.get("id"))
            else:
                self.logger.info("Unhandled webhook event type", event_type=event.type)
        except Exception as exc:
            self.logger.exception("Webhook event processing failed", event_type=event.type, error=str(exc))

        return WebhookResponse(status_code=200, body={"received": True})

    async def on_payment_succeeded(self, intent: dict) -> None:
        intent_id = intent.get("id")
        metadata = intent.get("metadata") or {}
        client_id = metadata.get("client_id")
        trainer_id = metadata.get("trainer_id")
        if not client_id or not trainer_id:
            self.logger.error(
                "Payment intent missing client or trainer metadata",
                payment_intent_id=intent_id,
            )
            return

        sessions = self.sessions_per_package
        amount = (intent.get("amount") or 0) / 100

        package_id = None
        try:
            package_id = await asyncio.to_thread(self.ledger.credit, client_id, trainer_id, sessions)
        except Exception as exc:
            self.logger.exception("Error updating session package", payment_intent_id=intent_id, error=str(exc))

        try:
            await asyncio.to_thread(
                self.ledger.record_payment,
                client_id,
                trainer_id,
                amount=amount,
                sessions=sessions,
                payment_intent_id=intent_id,
                package_id=package_id,
            )
        except Exception as exc:
            self.logger.exception("Error recording payment history", payment_intent_id=intent_id, error=str(exc))

        try:
            notification = compose(
                DomainEvent(
                    kind=EventKind.PAYMENT_SUCCEEDED,
                    recipient_id=client_id,
                    actor_id=trainer_id,
                    entity_id=intent_id,
                    amount=amount,
                    currency=intent.get("currency"),
                    sessions=sessions,
                ),
                now=self.clock(),
                tz=self.tz,
            )
            await self.dispatcher.dispatch(client_id, notification)
        except Exception as exc:
            self.logger.exception("Error sending payment notification", payment_intent_id=intent_id, error=str(exc))

        self.logger.info("Payment succeeded", payment_intent_id=intent_id)
