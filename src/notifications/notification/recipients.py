"""Recipient resolver — display names and push tokens for a user id."""

import structlog

from shared.store import DocumentStore
from shared.store.collections import FCM_TOKENS, USERS

logger = structlog.get_logger(__name__)

FALLBACK_NAME = "Someone"


class RecipientResolver:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def resolve_display_name(self, user_id: str | None) -> str:
        """Return a human-readable name; never fails.

        Falls back to ``"Someone"`` when the user is unknown, has no usable
        name fields, or the store lookup errors.
        """
        if not user_id:
            return FALLBACK_NAME
        try:
            user = self.store.get(USERS, user_id)
        except Exception as exc:
            logger.warning("Display name lookup failed", user_id=user_id, error=str(exc))
            return FALLBACK_NAME
        if not user:
            return FALLBACK_NAME

        for key in ("displayName", "name"):
            value = (user.get(key) or "").strip()
            if value:
                return value

        full_name = " ".join(
            part.strip() for part in (user.get("firstName") or "", user.get("lastName") or "") if part.strip()
        )
        return full_name or FALLBACK_NAME

    def resolve_tokens(self, user_id: str) -> list[str]:
        """Return the user's registered push tokens in order, without duplicates."""
        user = self.store.get(USERS, user_id)
        if not user:
            return []
        return list(dict.fromkeys(t for t in user.get(FCM_TOKENS) or [] if t))
