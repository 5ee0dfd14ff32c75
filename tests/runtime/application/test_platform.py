"""Tests for the event platform: routing, wildcards, and the best-effort boundary."""

import asyncio

import pytest
from runtime.platform import (
    ChangeEvent,
    ChangeType,
    EventPlatform,
    HandlerOutcome,
    best_effort,
    match_collection,
)


def _change(collection="sessions", change_type=ChangeType.CREATE, after=None, before=None):
    return ChangeEvent(
        change_type=change_type,
        collection=collection,
        document_id="doc-1",
        after=after or {},
        before=before,
    )


class TestMatchCollection:
    def test_exact_match(self):
        assert match_collection("sessions", "sessions") == {}

    def test_wildcard_captures_segment(self):
        params = match_collection("conversations/{conversationId}/messages", "conversations/c-42/messages")
        assert params == {"conversationId": "c-42"}

    def test_different_depth_does_not_match(self):
        assert match_collection("conversations/{conversationId}/messages", "conversations") is None

    def test_different_name_does_not_match(self):
        assert match_collection("sessions", "users") is None


class TestBestEffort:
    def test_exception_becomes_failed_outcome(self):
        @best_effort
        async def broken(change):
            raise RuntimeError("store unreachable")

        outcome = asyncio.run(broken(_change()))
        assert outcome.ok is False
        assert outcome.error == "store unreachable"
        assert "broken" in outcome.handler

    def test_none_result_is_success(self):
        @best_effort
        async def quiet(change):
            return None

        outcome = asyncio.run(quiet(_change()))
        assert outcome.ok is True

    def test_explicit_outcome_passes_through(self):
        @best_effort
        async def explicit(change):
            return HandlerOutcome.failure("skipped", handler="explicit")

        assert asyncio.run(explicit(_change())) == HandlerOutcome.failure("skipped", handler="explicit")


class TestEventPlatform:
    def setup_method(self):
        self.platform = EventPlatform()
        self.calls = []

    def _recorder(self, label):
        @best_effort
        async def handler(change):
            self.calls.append((label, change.params))

        return handler

    def test_create_routes_only_to_create_handlers(self):
        self.platform.on_create("sessions", self._recorder("create"))
        self.platform.on_update("sessions", self._recorder("update"))

        outcomes = asyncio.run(self.platform.deliver(_change()))

        assert [label for label, _ in self.calls] == ["create"]
        assert [o.ok for o in outcomes] == [True]

    def test_multiple_handlers_all_run(self):
        self.platform.on_update("users", self._recorder("a"))
        self.platform.on_update("users", self._recorder("b"))

        asyncio.run(self.platform.deliver(_change("users", ChangeType.UPDATE)))

        assert sorted(label for label, _ in self.calls) == ["a", "b"]

    def test_wildcard_params_reach_handler(self):
        self.platform.on_create("conversations/{conversationId}/messages", self._recorder("msg"))

        asyncio.run(self.platform.deliver(_change("conversations/c-7/messages")))

        assert self.calls == [("msg", {"conversationId": "c-7"})]

    def test_unmatched_change_is_noop(self):
        assert asyncio.run(self.platform.deliver(_change("unknown"))) == []

    def test_failing_handler_does_not_affect_sibling(self):
        @best_effort
        async def broken(change):
            raise ValueError("boom")

        self.platform.on_create("sessions", broken)
        self.platform.on_create("sessions", self._recorder("ok"))

        outcomes = asyncio.run(self.platform.deliver(_change()))

        assert [o.ok for o in outcomes] == [False, True]
        assert self.calls == [("ok", {})]

    def test_unwrapped_handler_exception_is_contained(self):
        async def raw(change):
            raise KeyError("missing")

        self.platform.on_create("sessions", raw)
        outcomes = asyncio.run(self.platform.deliver(_change()))

        assert len(outcomes) == 1
        assert outcomes[0].ok is False

    def test_run_job(self):
        ran = []

        @best_effort
        async def job():
            ran.append(True)

        self.platform.on_schedule("nightly", "0 19 * * *", job)

        outcome = asyncio.run(self.platform.run_job("nightly"))

        assert outcome.ok is True
        assert ran == [True]
        assert [(j.name, j.schedule) for j in self.platform.jobs] == [("nightly", "0 19 * * *")]

    def test_run_unknown_job_raises(self):
        with pytest.raises(KeyError):
            asyncio.run(self.platform.run_job("missing"))

    def test_duplicate_job_name_rejected(self):
        async def job():
            return None

        self.platform.on_schedule("nightly", "0 19 * * *", job)
        with pytest.raises(ValueError, match="already registered"):
            self.platform.on_schedule("nightly", "0 20 * * *", job)
