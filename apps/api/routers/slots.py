"""Slot listing and publication endpoints."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from apps.api.deps import get_store, read_payload, request_body_schema, require_roles
from domain.enums import Role, SlotStatus
from domain.models import CreateSlotRequest, Slot, SlotListResponse
from services.scheduling_store import SchedulingStore


router = APIRouter(tags=["slots"])


@router.get("/slots", response_model=SlotListResponse)
async def list_slots(
    interviewer_id: Optional[str] = Query(None, alias="interviewerId", description="Filter by interviewer"),
    status: Optional[SlotStatus] = Query(None, description="Filter by slot status"),
    from_time: Optional[datetime] = Query(None, alias="from", description="Earliest slot start (ISO-8601)"),
    to_time: Optional[datetime] = Query(None, alias="to", description="Latest slot start (ISO-8601)"),
    store: SchedulingStore = Depends(get_store),
):
    """
    List slots matching all provided filters, along with the people directory.
    """
    slots = store.list_slots(
        interviewer_id=interviewer_id,
        status=status,
        from_time=from_time,
        to_time=to_time,
    )
    return SlotListResponse(slots=slots, people=store.list_people())


@router.post(
    "/slots",
    response_model=Slot,
    status_code=201,
    openapi_extra=request_body_schema(CreateSlotRequest),
)
async def create_slot(
    request: Request,
    role: Role = Depends(require_roles(Role.INTERVIEWER)),
    store: SchedulingStore = Depends(get_store),
):
    """
    Publish a new availability slot.

    Requires the Interviewer role.
    """
    payload = await read_payload(request, CreateSlotRequest)
    return store.create_slot(
        interviewer_id=payload.interviewer_id,
        start_time=payload.start_time,
        end_time=payload.end_time,
        location=payload.location,
    )
