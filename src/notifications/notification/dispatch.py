"""Dispatcher — fans a notification out to every push token of a user.

Delivery is best-effort: ``dispatch`` never raises. Each token gets one send
attempt; all attempts run concurrently in worker threads and the call waits
for every one of them. Store reads and writes also run in worker threads
so a slow store never blocks the event loop. Tokens whose send fails are pruned from the user's
token list afterwards.

Pruning is a read-modify-write without a transaction. The token list is
re-read after the sends so tokens registered meanwhile survive, but two
concurrent dispatches to the same user can still overwrite each other's
write (last writer wins).
"""

import asyncio
from dataclasses import dataclass

import structlog

from notifications.channel.push_port import PushPort
from notifications.notification.notification import Notification
from notifications.notification.recipients import RecipientResolver
from shared.store import DocumentNotFound, DocumentStore
from shared.store.collections import FCM_TOKENS, USERS

_default_logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    """What happened during one dispatch call."""

    sent: int = 0
    failed: tuple[str, ...] = ()
    pruned: bool = False
    error: str | None = None

    @property
    def attempted(self) -> int:
        return self.sent + len(self.failed)


@dataclass
class _Attempt:
    token: str
    ok: bool
    error: str | None = None


class Dispatcher:
    def __init__(
        self,
        store: DocumentStore,
        push: PushPort,
        resolver: RecipientResolver | None = None,
        logger=None,
    ) -> None:
        self.store = store
        self.push = push
        self.resolver = resolver or RecipientResolver(store)
        self.logger = logger or _default_logger

    async def dispatch(self, user_id: str, notification: Notification) -> DispatchResult:
        try:
            return await self._dispatch(user_id, notification)
        except Exception as exc:
            self.logger.exception(
                "Notification dispatch failed",
                user_id=user_id,
                notification_type=notification.kind,
                error=str(exc),
            )
            return DispatchResult(error=str(exc))

    async def _dispatch(self, user_id: str, notification: Notification) -> DispatchResult:
        tokens = await asyncio.to_thread(self.resolver.resolve_tokens, user_id)
        if not tokens:
            self.logger.info(
                "No push tokens registered, skipping",
                user_id=user_id,
                notification_type=notification.kind,
            )
            return DispatchResult()

        attempts = await asyncio.gather(
            *(asyncio.to_thread(self._send_one, token, notification) for token in tokens)
        )

        for attempt in attempts:
            if not attempt.ok:
                self.logger.warning(
                    "Push send failed",
                    user_id=user_id,
                    token_suffix=attempt.token[-6:],
                    error=attempt.error,
                )

        invalid = [a.token for a in attempts if not a.ok]
        sent = len(attempts) - len(invalid)
        self.logger.info(
            "Notification dispatched",
            user_id=user_id,
            notification_type=notification.kind,
            sent=sent,
            failed=len(invalid),
        )

        pruned = False
        if invalid:
            pruned = await asyncio.to_thread(self._prune_tokens, user_id, set(invalid))
        return DispatchResult(sent=sent, failed=tuple(invalid), pruned=pruned)

    def _send_one(self, token: str, notification: Notification) -> _Attempt:
        try:
            result = self.push.send(
                device_token=token,
                title=notification.title,
                body=notification.body,
                data=dict(notification.data),
            )
        except Exception as exc:
            return _Attempt(token=token, ok=False, error=str(exc))

        if result.get("status") == "sent":
            return _Attempt(token=token, ok=True)
        return _Attempt(token=token, ok=False, error=result.get("error", "Unknown push error"))

    def _prune_tokens(self, user_id: str, invalid: set[str]) -> bool:
        # Re-read so tokens registered during the sends are not discarded
        user = self.store.get(USERS, user_id)
        if user is None:
            self.logger.info("User disappeared before token pruning", user_id=user_id)
            return False

        current = user.get(FCM_TOKENS) or []
        remaining = [t for t in current if t not in invalid]
        try:
            self.store.update(USERS, user_id, {FCM_TOKENS: remaining})
        except DocumentNotFound:
            self.logger.info("User disappeared before token pruning", user_id=user_id)
            return False

        self.logger.info(
            "Pruned invalid push tokens",
            user_id=user_id,
            removed=len(current) - len(remaining),
        )
        return True
