"""Account approved template."""

from shared.events.coaching import EventKind


class AccountApprovedTemplate:
    notification_type = EventKind.ACCOUNT_APPROVED.value
    entity_key = None

    @staticmethod
    def render(context: dict) -> dict:  # noqa: ARG004
        return {
            "title": "Account Approved",
            "body": "Your account has been approved. Welcome aboard!",
        }
