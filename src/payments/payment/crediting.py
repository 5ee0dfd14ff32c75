"""Entitlement crediting — session packages and payment history.

Both writes are plain read-then-write operations with no transaction: two
concurrent credits to the same package can lose one increment, and a
redelivered webhook credits again. Packages are never created here; a
payment without a matching package is recorded in history only.
"""

from collections.abc import Callable
from datetime import datetime

import structlog

from shared.clock import utc_now
from shared.store import DocumentStore, Filter
from shared.store.collections import PAYMENT_HISTORY, SESSION_PACKAGES

logger = structlog.get_logger(__name__)


class SessionPackageLedger:
    def __init__(self, store: DocumentStore, clock: Callable[[], datetime] = utc_now) -> None:
        self.store = store
        self.clock = clock

    def find_package(self, client_id: str, trainer_id: str):
        """Return the first package for the (client, trainer) pair, if any."""
        packages = self.store.query(
            SESSION_PACKAGES,
            [Filter("clientId", "==", client_id), Filter("trainerId", "==", trainer_id)],
            limit=1,
        )
        return packages[0] if packages else None

    def credit(self, client_id: str, trainer_id: str, sessions: int) -> str | None:
        """Add ``sessions`` to the pair's package and return its id.

        Returns None without writing when the pair has no package.
        """
        package = self.find_package(client_id, trainer_id)
        if package is None:
            logger.warning(
                "No session package for client and trainer, credit skipped",
                client_id=client_id,
                trainer_id=trainer_id,
            )
            return None

        remaining = package.data.get("sessionsRemaining") or 0
        self.store.update(
            SESSION_PACKAGES,
            package.id,
            {"sessionsRemaining": remaining + sessions, "updatedAt": self.clock()},
        )
        logger.info(
            "Session package credited",
            package_id=package.id,
            sessions_added=sessions,
            sessions_remaining=remaining + sessions,
        )
        return package.id

    def record_payment(
        self,
        client_id: str,
        trainer_id: str,
        amount: float,
        sessions: int,
        payment_intent_id: str | None,
        package_id: str | None = None,
    ) -> str:
        history_id = self.store.create(
            PAYMENT_HISTORY,
            {
                "clientId": client_id,
                "trainerId": trainer_id,
                "sessionPackageId": package_id or "",
                "amount": amount,
                "sessionsPurchased": sessions,
                "stripePaymentIntentId": payment_intent_id,
                "status": "completed",
                "createdAt": self.clock(),
            },
        )
        logger.info("Payment history recorded", history_id=history_id, payment_intent_id=payment_intent_id)
        return history_id
