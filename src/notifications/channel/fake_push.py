"""Fake push notification adapter — records sent pushes for testing."""

import threading
from uuid import uuid4

from notifications.channel.push_port import PushPort


class FakePushAdapter(PushPort):
    """Push adapter that records notifications in memory for test assertions.

    Failures can be configured for every token (``configure``) or for
    specific tokens only (``fail_tokens``). ``on_send`` is invoked before each
    send so tests can interleave store mutations with in-flight deliveries.
    """

    def __init__(self):
        self.sent_pushes: list[dict] = []
        self.attempts: list[str] = []
        self.should_succeed = True
        self.failure_reason = "Push delivery failed"
        self.failing_tokens: set[str] = set()
        self.on_send = None
        self._lock = threading.Lock()

    def configure(self, should_succeed: bool = True, failure_reason: str = "Push delivery failed"):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def fail_tokens(self, *tokens: str) -> None:
        """Make sends to the given tokens fail (unregistered device)."""
        self.failing_tokens.update(tokens)

    def send(
        self,
        device_token: str,
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        with self._lock:
            self.attempts.append(device_token)

        if self.on_send is not None:
            self.on_send(device_token)

        if not self.should_succeed or device_token in self.failing_tokens:
            return {
                "message_id": None,
                "status": "failed",
                "error": self.failure_reason,
            }

        message_id = f"push-{uuid4().hex[:12]}"
        record = {
            "message_id": message_id,
            "device_token": device_token,
            "title": title,
            "body": body,
            "data": data,
        }
        with self._lock:
            self.sent_pushes.append(record)

        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        """Clear sent pushes (useful between tests)."""
        self.sent_pushes.clear()
        self.attempts.clear()
        self.failing_tokens.clear()
        self.on_send = None
        self.should_succeed = True
        self.failure_reason = "Push delivery failed"
