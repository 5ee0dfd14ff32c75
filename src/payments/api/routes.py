"""FastAPI routes for the Payments domain — intents and the provider webhook."""

from fastapi import APIRouter, Header, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from payments.api.schemas import (
    ConfirmPaymentIntentResponse,
    CreatePaymentIntentRequest,
    PaymentIntentResponse,
    WebhookAckResponse,
)
from payments.payment.intents import (
    INTERNAL,
    INVALID_ARGUMENT,
    UNAUTHENTICATED,
    CallableError,
    CallerIdentity,
)

_ERROR_STATUS = {
    UNAUTHENTICATED: 401,
    INVALID_ARGUMENT: 400,
    INTERNAL: 500,
}

payment_router = APIRouter(prefix="/payments", tags=["payments"])


def _caller(x_caller_uid: str | None) -> CallerIdentity | None:
    # Set by the authenticating proxy in front of the service
    return CallerIdentity(uid=x_caller_uid) if x_caller_uid else None


def _raise_for(error: CallableError):
    raise HTTPException(
        status_code=_ERROR_STATUS.get(error.code, 500),
        detail={"code": error.code, "message": error.message},
    )


@payment_router.post("/intents", response_model=PaymentIntentResponse)
def create_payment_intent(
    body: CreatePaymentIntentRequest,
    request: Request,
    x_caller_uid: str | None = Header(default=None),
) -> PaymentIntentResponse:
    """Create a payment intent for a ten-session package."""
    service = request.app.state.services.intents
    try:
        result = service.create_payment_intent(
            amount=body.amount,
            currency=body.currency,
            client_id=body.client_id,
            trainer_id=body.trainer_id,
            caller=_caller(x_caller_uid),
        )
    except CallableError as exc:
        _raise_for(exc)
    return PaymentIntentResponse(**result)


@payment_router.post("/intents/{payment_intent_id}/confirm", response_model=ConfirmPaymentIntentResponse)
def confirm_payment_intent(
    payment_intent_id: str,
    request: Request,
    x_caller_uid: str | None = Header(default=None),
) -> ConfirmPaymentIntentResponse:
    """Fetch the current state of a payment intent."""
    service = request.app.state.services.intents
    try:
        result = service.confirm_payment_intent(payment_intent_id, caller=_caller(x_caller_uid))
    except CallableError as exc:
        _raise_for(exc)
    return ConfirmPaymentIntentResponse(**result)


@payment_router.post(
    "/webhook",
    responses={
        200: {"model": WebhookAckResponse},
        400: {"description": "Signature verification failed"},
    },
)
async def process_webhook(
    request: Request,
    stripe_signature: str = Header(default=""),
):
    """Process a payment provider webhook. The raw body is needed for the signature."""
    payload = await request.body()
    processor = request.app.state.services.webhook_processor
    response = await processor.process(payload, stripe_signature)

    if isinstance(response.body, str):
        return PlainTextResponse(response.body, status_code=response.status_code)
    return JSONResponse(response.body, status_code=response.status_code)
