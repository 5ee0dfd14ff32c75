"""Firebase Cloud Messaging push adapter (production)."""

import structlog
from firebase_admin import exceptions as firebase_exceptions
from firebase_admin import messaging

from notifications.channel.push_port import PushPort
from shared.firebase import get_firebase_app

logger = structlog.get_logger(__name__)


class FcmPushAdapter(PushPort):
    """Sends one FCM message per device token.

    FCM data payloads only accept string values, so numbers are stringified.
    Any SDK error is reported as a failed send; the caller decides whether
    the token is invalid.
    """

    def __init__(self, app=None) -> None:
        self.app = app or get_firebase_app()

    def send(
        self,
        device_token: str,
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        message = messaging.Message(
            token=device_token,
            notification=messaging.Notification(title=title, body=body),
            data={key: str(value) for key, value in (data or {}).items()},
        )
        try:
            message_id = messaging.send(message, app=self.app)
        except (firebase_exceptions.FirebaseError, ValueError) as exc:
            logger.warning("FCM send failed", error=str(exc))
            return {"message_id": None, "status": "failed", "error": str(exc)}

        return {"message_id": message_id, "status": "sent"}
