"""Shared BDD fixtures and step definitions for notifications."""

from pytest_bdd import given, parsers, then
from shared.store.collections import USERS


def _split(tokens: str) -> list[str]:
    return [t.strip() for t in tokens.split(",") if t.strip()]


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a client "{user_id}" with push tokens "{tokens}"'))
def client_with_tokens(seed_user, user_id, tokens):
    seed_user(user_id, name="Casey Client", tokens=_split(tokens))


@given(parsers.cfparse('the device "{token}" is unregistered'))
def unregistered_device(push, token):
    push.fail_tokens(token)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("{count:d} pushes are delivered"))
def pushes_delivered(push, count):
    assert len(push.sent_pushes) == count


@then(parsers.cfparse('the push tokens of "{user_id}" are "{tokens}"'))
def push_tokens_are(store, user_id, tokens):
    assert store.get(USERS, user_id)["fcmTokens"] == _split(tokens)
