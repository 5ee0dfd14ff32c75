"""Tests for change-feed notification handlers, delivered through the platform."""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest
from notifications.notification.registration import register_notification_handlers
from runtime.platform import ChangeEvent, ChangeType, EventPlatform
from shared.store.collections import (
    ASSIGNED_WORKOUTS,
    CONVERSATIONS,
    MEAL_ENTRIES,
    NUTRITION_PLANS,
    SESSIONS,
    USERS,
)

NOW = datetime(2026, 10, 19, 14, 0, tzinfo=UTC)


@pytest.fixture()
def platform(store, dispatcher, clock, tz):
    platform = EventPlatform()
    register_notification_handlers(platform, store, dispatcher, clock=clock, tz=tz)
    return platform


@pytest.fixture(autouse=True)
def people(seed_user):
    seed_user("trainer-1", name="Tara Trainer")
    seed_user("client-1", name="Casey Client")


def _deliver(platform, change_type, collection, after, before=None, document_id="doc-1"):
    change = ChangeEvent(
        change_type=change_type,
        collection=collection,
        document_id=document_id,
        after=after,
        before=before,
    )
    outcomes = asyncio.run(platform.deliver(change))
    assert all(o.ok for o in outcomes)
    return outcomes


def _created(platform, collection, after, **kwargs):
    return _deliver(platform, ChangeType.CREATE, collection, after, **kwargs)


def _updated(platform, collection, before, after, **kwargs):
    return _deliver(platform, ChangeType.UPDATE, collection, after, before=before, **kwargs)


def _only_push(push):
    assert len(push.sent_pushes) == 1
    return push.sent_pushes[0]


# ---------------------------------------------------------------
# Workouts
# ---------------------------------------------------------------
class TestWorkoutEvents:
    WORKOUT = {"clientId": "client-1", "trainerId": "trainer-1", "name": "Leg Day", "status": "assigned"}

    def test_assigned_notifies_client(self, platform, push):
        _created(platform, ASSIGNED_WORKOUTS, self.WORKOUT, document_id="w1")

        sent = _only_push(push)
        assert sent["device_token"] == "tok-client-1"
        assert sent["title"] == "New Workout Assigned"
        assert sent["body"] == "Tara Trainer assigned you a new workout: Leg Day"
        assert sent["data"] == {"type": "workout_assigned", "workoutId": "w1", "actorId": "trainer-1"}

    def test_completion_notifies_trainer(self, platform, push):
        _updated(platform, ASSIGNED_WORKOUTS, self.WORKOUT, {**self.WORKOUT, "status": "completed"})

        sent = _only_push(push)
        assert sent["device_token"] == "tok-trainer-1"
        assert sent["body"] == "Casey Client completed Leg Day"

    @pytest.mark.parametrize(
        "before_status, after_status",
        [("completed", "completed"), ("assigned", "in_progress")],
    )
    def test_other_updates_ignored(self, platform, push, before_status, after_status):
        _updated(
            platform,
            ASSIGNED_WORKOUTS,
            {**self.WORKOUT, "status": before_status},
            {**self.WORKOUT, "status": after_status},
        )
        assert push.attempts == []

    def test_unknown_trainer_named_someone(self, platform, push):
        _created(platform, ASSIGNED_WORKOUTS, {**self.WORKOUT, "trainerId": "ghost"})
        assert _only_push(push)["body"].startswith("Someone assigned you")


# ---------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------
class TestSessionEvents:
    SESSION = {
        "clientId": "client-1",
        "trainerId": "trainer-1",
        "status": "scheduled",
        "startTime": NOW + timedelta(hours=2),
    }

    def test_booking_by_client_notifies_trainer(self, platform, push):
        _created(platform, SESSIONS, {**self.SESSION, "createdBy": "client-1"}, document_id="s1")

        sent = _only_push(push)
        assert sent["device_token"] == "tok-trainer-1"
        assert sent["body"] == "Casey Client booked a session for today at 12:00"
        assert sent["data"]["sessionId"] == "s1"

    def test_booking_by_trainer_notifies_client(self, platform, push):
        _created(platform, SESSIONS, {**self.SESSION, "createdBy": "trainer-1"})
        assert _only_push(push)["device_token"] == "tok-client-1"

    def test_booking_without_creator_assumed_client(self, platform, push):
        _created(platform, SESSIONS, self.SESSION)
        assert _only_push(push)["device_token"] == "tok-trainer-1"

    def test_trainer_cancellation_notifies_client(self, platform, push):
        after = {
            **self.SESSION,
            "status": "cancelled",
            "lastModifiedBy": "trainer-1",
            "cancellationReason": "Feeling sick",
        }
        _updated(platform, SESSIONS, self.SESSION, after)

        sent = _only_push(push)
        assert sent["device_token"] == "tok-client-1"
        assert sent["title"] == "Session Cancelled"
        assert sent["body"] == (
            "Tara Trainer cancelled the session scheduled for today at 12:00. Reason: Feeling sick"
        )

    def test_client_cancellation_notifies_trainer(self, platform, push):
        after = {**self.SESSION, "status": "cancelled", "lastModifiedBy": "client-1"}
        _updated(platform, SESSIONS, self.SESSION, after)

        sent = _only_push(push)
        assert sent["device_token"] == "tok-trainer-1"
        assert "Reason" not in sent["body"]

    def test_cancellation_without_modifier_assumed_trainer(self, platform, push):
        _updated(platform, SESSIONS, self.SESSION, {**self.SESSION, "status": "cancelled"})
        assert _only_push(push)["device_token"] == "tok-client-1"

    @pytest.mark.parametrize("start_time", ["next tuesday", "", ["not", "a", "date"]])
    def test_booking_with_unreadable_start_sent_without_time(self, platform, push, start_time):
        session = {**self.SESSION, "startTime": start_time, "createdBy": "client-1"}
        _created(platform, SESSIONS, session, document_id="s1")

        sent = _only_push(push)
        assert sent["body"] == "Casey Client booked a session"
        assert sent["data"]["sessionId"] == "s1"

    def test_cancellation_with_unreadable_start_sent_without_time(self, platform, push):
        before = {**self.SESSION, "startTime": "soon"}
        after = {**before, "status": "cancelled", "lastModifiedBy": "trainer-1", "cancellationReason": "Travel"}
        _updated(platform, SESSIONS, before, after)

        assert _only_push(push)["body"] == "Tara Trainer cancelled the session. Reason: Travel"

    def test_already_cancelled_ignored(self, platform, push):
        cancelled = {**self.SESSION, "status": "cancelled"}
        _updated(platform, SESSIONS, cancelled, {**cancelled, "notes": "edited"})
        assert push.attempts == []


# ---------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------
class TestAccountEvents:
    def test_approval_notifies_user(self, platform, push):
        _updated(platform, USERS, {"status": "pending"}, {"status": "approved"}, document_id="client-1")

        sent = _only_push(push)
        assert sent["device_token"] == "tok-client-1"
        assert sent["title"] == "Account Approved"
        assert sent["data"] == {"type": "account_approved"}

    def test_rejection_carries_reason(self, platform, push):
        _updated(
            platform,
            USERS,
            {"status": "pending"},
            {"status": "rejected", "rejectionReason": "Missing certification"},
            document_id="trainer-1",
        )

        sent = _only_push(push)
        assert sent["title"] == "Account Not Approved"
        assert sent["body"].endswith("Reason: Missing certification")

    @pytest.mark.parametrize(
        "before, after",
        [
            ({"status": "approved"}, {"status": "approved", "bio": "new"}),
            ({"status": "pending"}, {"status": "suspended"}),
        ],
    )
    def test_other_status_changes_ignored(self, platform, push, before, after):
        _updated(platform, USERS, before, after, document_id="client-1")
        assert push.attempts == []


# ---------------------------------------------------------------
# Nutrition
# ---------------------------------------------------------------
class TestNutritionEvents:
    def test_plan_notifies_client(self, platform, push):
        plan = {"clientId": "client-1", "trainerId": "trainer-1", "name": "Cutting Plan"}
        _created(platform, NUTRITION_PLANS, plan, document_id="p1")

        sent = _only_push(push)
        assert sent["device_token"] == "tok-client-1"
        assert sent["body"] == "Tara Trainer assigned you a nutrition plan: Cutting Plan"
        assert sent["data"]["planId"] == "p1"

    def test_meal_notifies_trainer(self, platform, push):
        meal = {"clientId": "client-1", "trainerId": "trainer-1", "mealType": "Breakfast"}
        _created(platform, MEAL_ENTRIES, meal)

        sent = _only_push(push)
        assert sent["device_token"] == "tok-trainer-1"
        assert sent["body"] == "Casey Client logged a meal: Breakfast"

    def test_meal_without_trainer_is_a_no_op(self, store, platform, push):
        _created(platform, MEAL_ENTRIES, {"clientId": "client-1", "mealType": "Lunch"})
        assert push.attempts == []
        assert store.writes == []


# ---------------------------------------------------------------
# Messages
# ---------------------------------------------------------------
class TestMessageEvents:
    @pytest.fixture(autouse=True)
    def conversation(self, store):
        store.put(CONVERSATIONS, "c1", {"participants": ["client-1", "trainer-1"]})

    def test_message_notifies_other_participant(self, platform, push):
        _created(
            platform,
            "conversations/c1/messages",
            {"senderId": "client-1", "text": "Running late, be there at 10:15"},
        )

        sent = _only_push(push)
        assert sent["device_token"] == "tok-trainer-1"
        assert sent["title"] == "New message from Casey Client"
        assert sent["body"] == "Running late, be there at 10:15"
        assert sent["data"]["conversationId"] == "c1"

    def test_missing_conversation_is_a_no_op(self, platform, push):
        _created(platform, "conversations/missing/messages", {"senderId": "client-1", "text": "hi"})
        assert push.attempts == []

    def test_no_other_participant_is_a_no_op(self, store, platform, push):
        store.put(CONVERSATIONS, "solo", {"participants": ["client-1"]})
        _created(platform, "conversations/solo/messages", {"senderId": "client-1", "text": "note to self"})
        assert push.attempts == []


# ---------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------
class TestHandlerIsolation:
    def test_failing_dependency_reported_as_outcome(self, store, clock, tz):
        from notifications.channel.fake_push import FakePushAdapter
        from notifications.notification.dispatch import Dispatcher
        from notifications.notification.recipients import RecipientResolver

        class ExplodingResolver(RecipientResolver):
            def resolve_display_name(self, user_id):
                raise RuntimeError("resolver exploded")

        platform = EventPlatform()
        dispatcher = Dispatcher(store, FakePushAdapter(), resolver=ExplodingResolver(store))
        register_notification_handlers(platform, store, dispatcher, clock=clock, tz=tz)

        change = ChangeEvent(
            change_type=ChangeType.CREATE,
            collection=ASSIGNED_WORKOUTS,
            document_id="w1",
            after={"clientId": "client-1", "trainerId": "trainer-1"},
        )
        outcomes = asyncio.run(platform.deliver(change))

        assert len(outcomes) == 1
        assert outcomes[0].ok is False
        assert outcomes[0].error == "resolver exploded"
