"""Push channel registry — pluggable push delivery transport.

Provides singleton access to the push adapter. Uses the fake adapter by
default; the FCM adapter is selected with PUSH_ADAPTER=fcm in production.
"""

import os

from notifications.channel.push_port import PushPort

_push_instance: PushPort | None = None


def get_push_channel() -> PushPort:
    """Return the configured push adapter (singleton)."""
    global _push_instance
    if _push_instance is None:
        adapter = os.environ.get("PUSH_ADAPTER", "fake")
        if adapter == "fake":
            from notifications.channel.fake_push import FakePushAdapter

            _push_instance = FakePushAdapter()
        elif adapter == "fcm":
            from notifications.channel.fcm_adapter import FcmPushAdapter

            _push_instance = FcmPushAdapter()
        else:
            raise ValueError(f"Unknown push adapter: {adapter}")

    return _push_instance


def set_push_channel(adapter: PushPort) -> None:
    """Override the active push adapter (useful for tests)."""
    global _push_instance
    _push_instance = adapter


def reset_channels():
    """Reset the push singleton (useful for testing)."""
    global _push_instance
    _push_instance = None
