"""Account rejected template — sent when an account application is declined."""

from shared.events.coaching import EventKind


class AccountRejectedTemplate:
    notification_type = EventKind.ACCOUNT_REJECTED.value
    entity_key = None

    @staticmethod
    def render(context: dict) -> dict:
        body = "Your account application was not approved."
        reason = context.get("reason")
        if reason:
            body += f" Reason: {reason}"
        return {"title": "Account Not Approved", "body": body}
