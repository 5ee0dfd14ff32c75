"""HTTP ingress for the hosting platform.

The change feed pushes one request per document change; the scheduler pings
one endpoint per job. Both always answer 200 once the request is well formed:
handler failures are reported in the body, never as an error status.
"""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Request

from runtime.api.schemas import (
    ChangeEventRequest,
    DeliveryResponse,
    HandlerOutcomeSchema,
    JobRunResponse,
)
from runtime.platform import ChangeEvent, ChangeType
from shared.logging_config import add_context, clear_context

runtime_router = APIRouter(tags=["runtime"])


@runtime_router.post("/events/{change_type}", response_model=DeliveryResponse)
async def deliver_change(change_type: ChangeType, body: ChangeEventRequest, request: Request) -> DeliveryResponse:
    platform = request.app.state.services.platform
    clear_context()
    add_context(change_type=change_type.value, collection=body.collection, document_id=body.document_id)
    outcomes = await platform.deliver(
        ChangeEvent(
            change_type=change_type,
            collection=body.collection,
            document_id=body.document_id,
            after=body.after,
            before=body.before,
            params=body.params,
        )
    )
    return DeliveryResponse(
        handled=len(outcomes),
        outcomes=[HandlerOutcomeSchema(**asdict(o)) for o in outcomes],
    )


@runtime_router.post("/jobs/{name}", response_model=JobRunResponse)
async def run_job(name: str, request: Request) -> JobRunResponse:
    platform = request.app.state.services.platform
    clear_context()
    add_context(job=name)
    try:
        outcome = await platform.run_job(name)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown job: {name}") from exc
    return JobRunResponse(job=name, outcome=HandlerOutcomeSchema(**asdict(outcome)))
