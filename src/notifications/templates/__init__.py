"""Template registry — maps EventKind values to template classes.

Each template knows the data key its entity id is exposed under and how to
render a title and body from the composer's context.
"""

from notifications.templates.account_approved import AccountApprovedTemplate
from notifications.templates.account_rejected import AccountRejectedTemplate
from notifications.templates.meal_logged import MealLoggedTemplate
from notifications.templates.message_received import MessageReceivedTemplate
from notifications.templates.nutrition_plan_assigned import (
    NutritionPlanAssignedTemplate,
)
from notifications.templates.payment_succeeded import PaymentSucceededTemplate
from notifications.templates.session_booked import SessionBookedTemplate
from notifications.templates.session_cancelled import SessionCancelledTemplate
from notifications.templates.session_reminder import SessionReminderTemplate
from notifications.templates.workout_assigned import WorkoutAssignedTemplate
from notifications.templates.workout_completed import WorkoutCompletedTemplate
from notifications.templates.workout_reminder import WorkoutReminderTemplate
from shared.events.coaching import EventKind

TEMPLATE_REGISTRY: dict[str, type] = {
    EventKind.WORKOUT_ASSIGNED.value: WorkoutAssignedTemplate,
    EventKind.WORKOUT_COMPLETED.value: WorkoutCompletedTemplate,
    EventKind.SESSION_BOOKED.value: SessionBookedTemplate,
    EventKind.SESSION_CANCELLED.value: SessionCancelledTemplate,
    EventKind.ACCOUNT_APPROVED.value: AccountApprovedTemplate,
    EventKind.ACCOUNT_REJECTED.value: AccountRejectedTemplate,
    EventKind.NUTRITION_PLAN_ASSIGNED.value: NutritionPlanAssignedTemplate,
    EventKind.MEAL_LOGGED.value: MealLoggedTemplate,
    EventKind.MESSAGE_RECEIVED.value: MessageReceivedTemplate,
    EventKind.SESSION_REMINDER.value: SessionReminderTemplate,
    EventKind.WORKOUT_REMINDER.value: WorkoutReminderTemplate,
    EventKind.PAYMENT_SUCCEEDED.value: PaymentSucceededTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by event kind string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
