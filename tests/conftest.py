from datetime import UTC, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

# 10:00 in New York
NOW = datetime(2026, 10, 19, 14, 0, tzinfo=UTC)
TZ = ZoneInfo("America/New_York")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def reset_adapters():
    """Drop adapter singletons so no state leaks between tests."""
    from notifications.channel import reset_channels
    from payments.gateway import reset_gateway
    from shared.store import reset_store

    yield

    reset_channels()
    reset_gateway()
    reset_store()


@pytest.fixture()
def store():
    from shared.store.memory import InMemoryDocumentStore

    return InMemoryDocumentStore()


@pytest.fixture()
def push():
    from notifications.channel.fake_push import FakePushAdapter

    return FakePushAdapter()


@pytest.fixture()
def gateway():
    from payments.gateway.fake_adapter import FakeGateway

    return FakeGateway()


@pytest.fixture()
def clock():
    return lambda: NOW


@pytest.fixture()
def tz():
    return TZ


@pytest.fixture()
def dispatcher(store, push):
    from notifications.notification.dispatch import Dispatcher

    return Dispatcher(store, push)


@pytest.fixture()
def seed_user(store):
    """Create a user document with a display name and push tokens."""
    from shared.store.collections import USERS

    def _seed(user_id, name=None, tokens=None, **fields):
        data = dict(fields)
        if name is not None:
            data["displayName"] = name
        data["fcmTokens"] = list(tokens) if tokens is not None else [f"tok-{user_id}"]
        store.put(USERS, user_id, data)
        return data

    return _seed
