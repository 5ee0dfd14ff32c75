"""Event platform — the seam between the hosting platform and the core.

The document-store change feed and the scheduler invoke handlers through
this interface. Each delivered change or job run executes as its own
short-lived task; handlers never share a call stack and never raise past
their boundary (see ``best_effort``).

Collection patterns may contain ``{wildcard}`` segments, e.g.
``conversations/{conversationId}/messages``; matching segments of the
concrete collection path are exposed on ``ChangeEvent.params``.
"""

import asyncio
import functools
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from enum import Enum

import structlog

logger = structlog.get_logger(__name__)


class ChangeType(Enum):
    CREATE = "create"
    UPDATE = "update"


@dataclass(frozen=True)
class ChangeEvent:
    """One change-feed delivery: (event type, new state, prior state, id)."""

    change_type: ChangeType
    collection: str
    document_id: str
    after: dict
    before: dict | None = None
    params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class HandlerOutcome:
    """Result of a handler invocation. Failures are already logged."""

    ok: bool
    handler: str | None = None
    error: str | None = None

    @classmethod
    def success(cls, handler: str | None = None) -> "HandlerOutcome":
        return cls(ok=True, handler=handler)

    @classmethod
    def failure(cls, error: str, handler: str | None = None) -> "HandlerOutcome":
        return cls(ok=False, handler=handler, error=error)


ChangeHandler = Callable[[ChangeEvent], Awaitable[HandlerOutcome]]
JobHandler = Callable[[], Awaitable[HandlerOutcome]]


def best_effort(func):
    """Wrap an async handler so it always returns a HandlerOutcome.

    Any exception is logged with the handler name and converted into a
    failed outcome; nothing propagates to the platform.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> HandlerOutcome:
        name = func.__qualname__
        try:
            result = await func(*args, **kwargs)
        except Exception as exc:
            logger.exception("Handler failed", handler=name, error=str(exc))
            return HandlerOutcome.failure(str(exc), handler=name)
        if isinstance(result, HandlerOutcome):
            return result
        return HandlerOutcome.success(handler=name)

    return wrapper


@dataclass(frozen=True)
class ScheduledJob:
    name: str
    schedule: str
    handler: JobHandler


class EventPlatform:
    """Registry and task runner for change-feed and scheduled handlers."""

    def __init__(self) -> None:
        self._handlers: dict[ChangeType, list[tuple[str, ChangeHandler]]] = {
            ChangeType.CREATE: [],
            ChangeType.UPDATE: [],
        }
        self._jobs: dict[str, ScheduledJob] = {}

    def on_create(self, collection: str, handler: ChangeHandler) -> None:
        self._handlers[ChangeType.CREATE].append((collection, handler))

    def on_update(self, collection: str, handler: ChangeHandler) -> None:
        self._handlers[ChangeType.UPDATE].append((collection, handler))

    def on_schedule(self, name: str, schedule: str, handler: JobHandler) -> None:
        if name in self._jobs:
            raise ValueError(f"Scheduled job already registered: {name}")
        self._jobs[name] = ScheduledJob(name=name, schedule=schedule, handler=handler)

    @property
    def jobs(self) -> list[ScheduledJob]:
        return list(self._jobs.values())

    def handlers_for(self, change: ChangeEvent) -> list[tuple[ChangeHandler, dict[str, str]]]:
        matched = []
        for pattern, handler in self._handlers[change.change_type]:
            params = match_collection(pattern, change.collection)
            if params is not None:
                matched.append((handler, params))
        return matched

    async def deliver(self, change: ChangeEvent) -> list[HandlerOutcome]:
        """Run every handler registered for the change concurrently."""
        matched = self.handlers_for(change)
        if not matched:
            logger.debug(
                "No handlers for change",
                change_type=change.change_type.value,
                collection=change.collection,
            )
            return []

        tasks = [
            asyncio.create_task(
                handler(replace(change, params={**change.params, **params}))
            )
            for handler, params in matched
        ]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        outcomes = []
        for result in results:
            if isinstance(result, BaseException):
                logger.error(
                    "Unwrapped handler raised",
                    collection=change.collection,
                    document_id=change.document_id,
                    error=str(result),
                )
                outcomes.append(HandlerOutcome.failure(str(result)))
            else:
                outcomes.append(result)
        return outcomes

    async def run_job(self, name: str) -> HandlerOutcome:
        job = self._jobs.get(name)
        if job is None:
            raise KeyError(f"Unknown scheduled job: {name}")
        logger.info("Running scheduled job", job=name, schedule=job.schedule)
        return await job.handler()


def match_collection(pattern: str, collection: str) -> dict[str, str] | None:
    """Match a concrete collection path against a pattern with wildcards."""
    pattern_parts = pattern.strip("/").split("/")
    path_parts = collection.strip("/").split("/")
    if len(pattern_parts) != len(path_parts):
        return None

    params = {}
    for expected, actual in zip(pattern_parts, path_parts):
        if expected.startswith("{") and expected.endswith("}"):
            params[expected[1:-1]] = actual
        elif expected != actual:
            return None
    return params
