"""Runtime configuration read from environment variables."""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo

# Sessions credited per purchased package and advertised in intent metadata
SESSIONS_PER_PACKAGE = 10

SESSION_REMINDER_SCHEDULE = "*/15 * * * *"
WORKOUT_REMINDER_SCHEDULE = "0 19 * * *"


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    time_zone: str = "America/New_York"
    stripe_secret_key: str | None = None
    stripe_webhook_secret: str | None = None
    log_level: str | None = None
    log_dir: Path | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            environment=(os.getenv("ENVIRONMENT") or os.getenv("ENV") or "development").lower(),
            time_zone=os.getenv("TIME_ZONE", "America/New_York"),
            stripe_secret_key=os.getenv("STRIPE_SECRET_KEY"),
            stripe_webhook_secret=os.getenv("STRIPE_WEBHOOK_SECRET"),
            log_level=os.getenv("LOG_LEVEL"),
            log_dir=Path(os.environ["LOG_DIR"]) if os.getenv("LOG_DIR") else None,
        )

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.time_zone)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
