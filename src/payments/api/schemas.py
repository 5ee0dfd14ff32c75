"""Pydantic request/response schemas for the Payments API.

These are external contracts (anti-corruption layer) — field names follow
the mobile client's camelCase payloads.
"""

from pydantic import BaseModel, ConfigDict, Field


class CreatePaymentIntentRequest(BaseModel):
    # Optional so missing fields surface as invalid-argument, not a 422
    amount: float | None = None
    currency: str | None = None
    client_id: str | None = Field(default=None, alias="clientId")
    trainer_id: str | None = Field(default=None, alias="trainerId")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "amount": 50.0,
                    "currency": "usd",
                    "clientId": "client-001",
                    "trainerId": "trainer-001",
                }
            ]
        },
    )


class PaymentIntentResponse(BaseModel):
    id: str
    client_secret: str | None = None
    amount: int
    currency: str
    status: str


class ConfirmPaymentIntentResponse(BaseModel):
    id: str
    status: str
    amount: int
    currency: str


class WebhookAckResponse(BaseModel):
    received: bool = True
