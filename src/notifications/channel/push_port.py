"""Push notification channel port — abstract per-token send primitive."""

from abc import ABC, abstractmethod


class PushPort(ABC):
    """Abstract interface for push notification delivery adapters."""

    @abstractmethod
    def send(
        self,
        device_token: str,
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        """Send one push notification to one device token.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
