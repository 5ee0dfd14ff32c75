"""Domain event contracts for the coaching app.

A DomainEvent is derived from a raw document change, a scheduled query match,
or a payment webhook. It carries only what the composer needs to render a
message and what the dispatcher needs to route it. Events are ephemeral and
never persisted.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class EventKind(Enum):
    WORKOUT_ASSIGNED = "workout_assigned"
    WORKOUT_COMPLETED = "workout_completed"
    SESSION_BOOKED = "session_booked"
    SESSION_CANCELLED = "session_cancelled"
    ACCOUNT_APPROVED = "account_approved"
    ACCOUNT_REJECTED = "account_rejected"
    NUTRITION_PLAN_ASSIGNED = "nutrition_plan_assigned"
    MEAL_LOGGED = "meal_logged"
    MESSAGE_RECEIVED = "message_received"
    SESSION_REMINDER = "session_reminder"
    WORKOUT_REMINDER = "workout_reminder"
    PAYMENT_SUCCEEDED = "payment_succeeded"


@dataclass(frozen=True)
class DomainEvent:
    """Something happened that a user should hear about."""

    kind: EventKind
    recipient_id: str
    actor_id: str | None = None
    actor_name: str | None = None
    entity_id: str | None = None
    description: str | None = None
    reason: str | None = None
    scheduled_at: datetime | None = None
    amount: float | None = None
    currency: str | None = None
    sessions: int | None = None
