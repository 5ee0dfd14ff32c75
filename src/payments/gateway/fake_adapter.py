"""Configurable fake payment gateway for development and testing.

This adapter simulates the gateway without any external calls. Webhooks are
accepted when signed with ``test-signature``; intents are kept in memory so
they can be retrieved again.
"""

import json
from uuid import uuid4

from payments.gateway.port import (
    GatewayEvent,
    PaymentGateway,
    PaymentGatewayError,
    PaymentIntentResult,
    WebhookVerificationError,
)

VALID_SIGNATURE = "test-signature"


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []
        self.intents: dict[str, PaymentIntentResult] = {}

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_payment_intent(
        self,
        amount_cents: int,
        currency: str,
        metadata: dict[str, str],
    ) -> PaymentIntentResult:
        self.calls.append(
            {
                "method": "create_payment_intent",
                "amount": amount_cents,
                "currency": currency,
                "metadata": dict(metadata),
            }
        )
        if not self.should_succeed:
            raise PaymentGatewayError(self.failure_reason)

        intent_id = f"pi_fake_{uuid4().hex[:16]}"
        intent = PaymentIntentResult(
            id=intent_id,
            amount=amount_cents,
            currency=currency,
            status="requires_payment_method",
            client_secret=f"{intent_id}_secret_{uuid4().hex[:8]}",
            metadata=dict(metadata),
        )
        self.intents[intent_id] = intent
        return intent

    def retrieve_payment_intent(self, payment_intent_id: str) -> PaymentIntentResult:
        self.calls.append({"method": "retrieve_payment_intent", "id": payment_intent_id})
        if not self.should_succeed:
            raise PaymentGatewayError(self.failure_reason)
        intent = self.intents.get(payment_intent_id)
        if intent is None:
            raise PaymentGatewayError(f"No such payment_intent: '{payment_intent_id}'")
        return intent

    def construct_event(self, payload: bytes, signature: str) -> GatewayEvent:
        if signature != VALID_SIGNATURE:
            raise WebhookVerificationError("No signatures found matching the expected signature for payload")
        try:
            event = json.loads(payload)
            return GatewayEvent(
                id=event.get("id"),
                type=event["type"],
                data=event.get("data", {}).get("object", {}),
            )
        except (ValueError, KeyError, AttributeError) as exc:
            raise WebhookVerificationError(f"Invalid payload: {exc}") from exc
