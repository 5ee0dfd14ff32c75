"""Payment succeeded template — sent to the client after sessions are credited."""

from shared.events.coaching import EventKind


class PaymentSucceededTemplate:
    notification_type = EventKind.PAYMENT_SUCCEEDED.value
    entity_key = "paymentIntentId"

    @staticmethod
    def render(context: dict) -> dict:
        amount = context.get("amount")
        currency = (context.get("currency") or "").upper()
        sessions = context.get("sessions")

        if amount is not None:
            body = f"Your payment of {amount:.2f} {currency}".rstrip() + " was received."
        else:
            body = "Your payment was received."
        if sessions:
            body += f" {sessions} sessions have been added to your package."
        return {"title": "Payment Successful", "body": body}
