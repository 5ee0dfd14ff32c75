"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement.
This enables swapping between FakeGateway (dev/test) and StripeGateway
(production) without changing the webhook processor or the intent callables.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class PaymentGatewayError(Exception):
    """The gateway rejected or failed a request."""


class WebhookVerificationError(Exception):
    """A webhook payload could not be authenticated or parsed."""


@dataclass(frozen=True)
class PaymentIntentResult:
    """A payment intent as reported by the gateway. Amounts are in cents."""

    id: str
    amount: int
    currency: str
    status: str
    client_secret: str | None = None
    metadata: dict = field(default_factory=dict)


@dataclass(frozen=True)
class GatewayEvent:
    """A verified webhook event. ``data`` is the event's payload object."""

    id: str | None
    type: str
    data: dict = field(default_factory=dict)


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_payment_intent(
        self,
        amount_cents: int,
        currency: str,
        metadata: dict[str, str],
    ) -> PaymentIntentResult:
        """Create a payment intent with automatic payment methods enabled."""
        ...

    @abstractmethod
    def retrieve_payment_intent(self, payment_intent_id: str) -> PaymentIntentResult:
        """Fetch the current state of a payment intent."""
        ...

    @abstractmethod
    def construct_event(self, payload: bytes, signature: str) -> GatewayEvent:
        """Verify a webhook signature and parse the event.

        Raises:
            WebhookVerificationError: the signature or payload is invalid.
        """
        ...

    def verify_webhook_signature(self, payload: bytes, signature: str) -> bool:
        """Verify that a webhook payload is authentically from the gateway."""
        try:
            self.construct_event(payload, signature)
        except WebhookVerificationError:
            return False
        return True
