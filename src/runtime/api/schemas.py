"""Pydantic schemas for the change-feed and scheduler ingress."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChangeEventRequest(BaseModel):
    collection: str
    document_id: str = Field(alias="documentId")
    after: dict[str, Any]
    before: dict[str, Any] | None = None
    params: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)


class HandlerOutcomeSchema(BaseModel):
    ok: bool
    handler: str | None = None
    error: str | None = None


class DeliveryResponse(BaseModel):
    handled: int
    outcomes: list[HandlerOutcomeSchema]


class JobRunResponse(BaseModel):
    job: str
    outcome: HandlerOutcomeSchema
