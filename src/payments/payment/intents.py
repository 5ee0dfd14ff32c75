"""Payment intent callables used by the mobile client.

Callers must be authenticated; missing fields are rejected before the
gateway is contacted. Errors carry a classified code so the HTTP layer can
map them to a status.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import structlog

from payments.gateway.port import PaymentGateway, PaymentGatewayError
from shared.config import SESSIONS_PER_PACKAGE

logger = structlog.get_logger(__name__)

UNAUTHENTICATED = "unauthenticated"
INVALID_ARGUMENT = "invalid-argument"
INTERNAL = "internal"

# Largest amount the payment provider accepts, in cents
MAX_AMOUNT_CENTS = 99_999_999


class CallableError(Exception):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


@dataclass(frozen=True)
class CallerIdentity:
    uid: str


def to_minor_units(amount) -> int:
    """Convert a major-unit amount to cents, rounding half up.

    Non-numeric, non-finite and out-of-range amounts are rejected as
    invalid arguments.
    """
    try:
        value = Decimal(str(amount))
        if not value.is_finite():
            raise InvalidOperation(f"non-finite amount {amount!r}")
        cents = int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError) as exc:
        raise CallableError(INVALID_ARGUMENT, f"Invalid amount: {amount!r}") from exc
    if cents > MAX_AMOUNT_CENTS:
        raise CallableError(INVALID_ARGUMENT, f"Amount exceeds the maximum of {MAX_AMOUNT_CENTS // 100}")
    return cents


class PaymentIntentService:
    def __init__(self, gateway: PaymentGateway, sessions_per_package: int = SESSIONS_PER_PACKAGE) -> None:
        self.gateway = gateway
        self.sessions_per_package = sessions_per_package

    def create_payment_intent(
        self,
        amount,
        currency: str | None,
        client_id: str | None,
        trainer_id: str | None,
        caller: CallerIdentity | None,
    ) -> dict:
        if caller is None:
            raise CallableError(UNAUTHENTICATED, "User must be authenticated to create payment intent")
        if not amount or not currency or not client_id or not trainer_id:
            raise CallableError(
                INVALID_ARGUMENT,
                "Missing required fields: amount, currency, clientId, trainerId",
            )

        amount_cents = to_minor_units(amount)
        if amount_cents <= 0:
            raise CallableError(INVALID_ARGUMENT, "Amount must be positive")

        try:
            intent = self.gateway.create_payment_intent(
                amount_cents=amount_cents,
                currency=currency,
                metadata={
                    "client_id": client_id,
                    "trainer_id": trainer_id,
                    "sessions_purchased": str(self.sessions_per_package),
                    "firebase_user_id": caller.uid,
                },
            )
        except PaymentGatewayError as exc:
            logger.error("Error creating payment intent", client_id=client_id, error=str(exc))
            raise CallableError(INTERNAL, str(exc)) from exc

        logger.info("Payment intent created", payment_intent_id=intent.id, amount=amount_cents)
        return {
            "id": intent.id,
            "client_secret": intent.client_secret,
            "amount": intent.amount,
            "currency": intent.currency,
            "status": intent.status,
        }

    def confirm_payment_intent(self, payment_intent_id: str | None, caller: CallerIdentity | None) -> dict:
        if caller is None:
            raise CallableError(UNAUTHENTICATED, "User must be authenticated")
        if not payment_intent_id:
            raise CallableError(INVALID_ARGUMENT, "Payment intent ID is required")

        try:
            intent = self.gateway.retrieve_payment_intent(payment_intent_id)
        except PaymentGatewayError as exc:
            logger.error("Error confirming payment intent", payment_intent_id=payment_intent_id, error=str(exc))
            raise CallableError(INTERNAL, str(exc)) from exc

        return {
            "id": intent.id,
            "status": intent.status,
            "amount": intent.amount,
            "currency": intent.currency,
        }
