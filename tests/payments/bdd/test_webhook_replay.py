"""BDD tests for webhook crediting and replay."""

import asyncio
import json

import pytest
from payments.gateway.fake_adapter import VALID_SIGNATURE
from payments.payment.webhook import WebhookProcessor
from pytest_bdd import given, parsers, scenarios, then, when
from shared.store.collections import PAYMENT_HISTORY, SESSION_PACKAGES

scenarios("features/webhook_replay.feature")


@pytest.fixture()
def delivery():
    """The last webhook delivery: payload and response."""
    return {"payload": None, "response": None}


@pytest.fixture()
def processor(gateway, store, dispatcher, clock, tz):
    return WebhookProcessor(gateway, store, dispatcher, clock=clock, tz=tz)


def _event(amount, client_id, trainer_id):
    return json.dumps(
        {
            "id": "evt_1",
            "type": "payment_intent.succeeded",
            "data": {
                "object": {
                    "id": "pi_1",
                    "amount": amount,
                    "currency": "usd",
                    "metadata": {"client_id": client_id, "trainer_id": trainer_id},
                }
            },
        }
    ).encode()


def _send(processor, delivery, payload, signature):
    delivery["payload"] = payload
    delivery["response"] = asyncio.run(processor.process(payload, signature))


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a session package for "{client_id}" with "{trainer_id}" holding {sessions:d} sessions'))
def session_package(store, seed_user, client_id, trainer_id, sessions):
    seed_user(client_id, name="Casey Client")
    store.put(
        SESSION_PACKAGES,
        "pkg-1",
        {"clientId": client_id, "trainerId": trainer_id, "sessionsRemaining": sessions},
    )


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('a signed payment of {amount:d} cents succeeds for "{client_id}" with "{trainer_id}"'))
def signed_payment(processor, delivery, amount, client_id, trainer_id):
    _send(processor, delivery, _event(amount, client_id, trainer_id), VALID_SIGNATURE)


@when(parsers.cfparse('an unsigned payment of {amount:d} cents arrives for "{client_id}" with "{trainer_id}"'))
def unsigned_payment(processor, delivery, amount, client_id, trainer_id):
    _send(processor, delivery, _event(amount, client_id, trainer_id), "")


@when("the same event is delivered again")
def redelivered(processor, delivery):
    _send(processor, delivery, delivery["payload"], VALID_SIGNATURE)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the package holds {sessions:d} sessions"))
def package_holds(store, sessions):
    assert store.get(SESSION_PACKAGES, "pkg-1")["sessionsRemaining"] == sessions


@then(parsers.cfparse("{count:d} payment is recorded"))
@then(parsers.cfparse("{count:d} payments are recorded"))
def payments_recorded(store, count):
    assert len(store.all(PAYMENT_HISTORY)) == count


@then(parsers.cfparse("the webhook answers {status:d}"))
def webhook_answers(delivery, status):
    assert delivery["response"].status_code == status
