"""Coaching notifications FastAPI application.

Serves the payment callables, the payment provider webhook, and the HTTP
ingress through which the hosting platform delivers document changes and
scheduled job pings.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, tzinfo

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from notifications.channel import get_push_channel
from notifications.channel.push_port import PushPort
from notifications.notification.dispatch import Dispatcher
from notifications.notification.recipients import RecipientResolver
from notifications.notification.registration import register_notification_handlers
from payments.gateway import get_gateway
from payments.gateway.port import PaymentGateway
from payments.payment.intents import PaymentIntentService
from payments.payment.webhook import WebhookProcessor
from runtime.platform import EventPlatform
from shared.clock import utc_now
from shared.config import get_settings
from shared.logging_config import configure_logging
from shared.store import DocumentStore, get_store


@dataclass
class Services:
    platform: EventPlatform
    dispatcher: Dispatcher
    webhook_processor: WebhookProcessor
    intents: PaymentIntentService


def build_services(
    store: DocumentStore | None = None,
    push: PushPort | None = None,
    gateway: PaymentGateway | None = None,
    clock: Callable[[], datetime] = utc_now,
    tz: tzinfo | None = None,
) -> Services:
    """Wire every component with explicit store, transport and gateway handles."""
    store = store or get_store()
    push = push or get_push_channel()
    gateway = gateway or get_gateway()
    tz = tz or get_settings().tz

    dispatcher = Dispatcher(store, push, RecipientResolver(store))
    platform = EventPlatform()
    register_notification_handlers(platform, store, dispatcher, clock=clock, tz=tz)

    return Services(
        platform=platform,
        dispatcher=dispatcher,
        webhook_processor=WebhookProcessor(gateway, store, dispatcher, clock=clock, tz=tz),
        intents=PaymentIntentService(gateway),
    )


def create_app(services: Services | None = None) -> FastAPI:
    from payments.api.routes import payment_router
    from runtime.api.routes import runtime_router

    app = FastAPI(
        title="Coaching Notifications API",
        description="Push notification dispatch and payment reconciliation",
    )
    app.state.services = services or build_services()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(payment_router)
    app.include_router(runtime_router)

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "jobs": [
                    {"name": job.name, "schedule": job.schedule}
                    for job in app.state.services.platform.jobs
                ],
            }
        )

    return app


configure_logging(get_settings())
app = create_app()
