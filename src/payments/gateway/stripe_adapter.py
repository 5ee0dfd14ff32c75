"""Stripe payment gateway adapter (production).

Uses the stripe-python SDK for PaymentIntents and webhook signature checks.
The API key is passed per request rather than set globally.
"""

import json

import stripe

from payments.gateway.port import (
    GatewayEvent,
    PaymentGateway,
    PaymentGatewayError,
    PaymentIntentResult,
    WebhookVerificationError,
)


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(self, api_key: str, webhook_secret: str) -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret

    def create_payment_intent(
        self,
        amount_cents: int,
        currency: str,
        metadata: dict[str, str],
    ) -> PaymentIntentResult:
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount_cents,
                currency=currency,
                automatic_payment_methods={"enabled": True},
                metadata=metadata,
                api_key=self.api_key,
            )
        except stripe.StripeError as exc:
            raise PaymentGatewayError(exc.user_message or str(exc)) from exc
        return _to_result(intent)

    def retrieve_payment_intent(self, payment_intent_id: str) -> PaymentIntentResult:
        try:
            intent = stripe.PaymentIntent.retrieve(payment_intent_id, api_key=self.api_key)
        except stripe.StripeError as exc:
            raise PaymentGatewayError(exc.user_message or str(exc)) from exc
        return _to_result(intent)

    def construct_event(self, payload: bytes, signature: str) -> GatewayEvent:
        try:
            stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except (ValueError, stripe.SignatureVerificationError) as exc:
            raise WebhookVerificationError(str(exc)) from exc

        # Signature checked; read the raw JSON so data stays plain dicts
        event = json.loads(payload)
        return GatewayEvent(
            id=event.get("id"),
            type=event["type"],
            data=event.get("data", {}).get("object", {}),
        )


def _to_result(intent) -> PaymentIntentResult:
    return PaymentIntentResult(
        id=intent.id,
        amount=intent.amount,
        currency=intent.currency,
        status=intent.status,
        client_secret=intent.client_secret,
        metadata=dict(intent.metadata or {}),
    )
