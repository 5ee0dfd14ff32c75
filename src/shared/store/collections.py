"""Document store collection names.

The store has no schema; these constants are the single source of truth for
the collection names the core reads and writes.
"""

USERS = "users"
ASSIGNED_WORKOUTS = "assignedWorkouts"
SESSIONS = "sessions"
NUTRITION_PLANS = "nutritionPlans"
MEAL_ENTRIES = "mealEntries"
CONVERSATIONS = "conversations"
MESSAGES = "messages"
CONVERSATION_MESSAGES = "conversations/{conversationId}/messages"
SESSION_PACKAGES = "sessionPackages"
PAYMENT_HISTORY = "paymentHistory"

# Field on a user document holding the registered push tokens
FCM_TOKENS = "fcmTokens"
