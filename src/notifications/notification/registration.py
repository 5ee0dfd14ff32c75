"""Wires every notification trigger and reminder job onto an EventPlatform."""

from collections.abc import Callable
from datetime import datetime, tzinfo

from notifications.notification.account_events import AccountEventsHandler
from notifications.notification.dispatch import Dispatcher
from notifications.notification.message_events import MessageEventsHandler
from notifications.notification.nutrition_events import NutritionEventsHandler
from notifications.notification.scheduler import ReminderJobs
from notifications.notification.session_events import SessionEventsHandler
from notifications.notification.workout_events import WorkoutEventsHandler
from runtime.platform import EventPlatform
from shared.clock import utc_now
from shared.store import DocumentStore

HANDLER_CLASSES = (
    WorkoutEventsHandler,
    SessionEventsHandler,
    AccountEventsHandler,
    NutritionEventsHandler,
    MessageEventsHandler,
    ReminderJobs,
)


def register_notification_handlers(
    platform: EventPlatform,
    store: DocumentStore,
    dispatcher: Dispatcher,
    clock: Callable[[], datetime] = utc_now,
    tz: tzinfo | None = None,
) -> None:
    for handler_cls in HANDLER_CLASSES:
        handler = handler_cls(store, dispatcher, clock=clock, tz=tz)
        handler.register(platform)
