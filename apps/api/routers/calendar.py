"""Interviewer calendar endpoint."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from apps.api.deps import get_store
from domain.errors import InvalidInputError
from domain.models import CalendarResponse
from services.scheduling_store import SchedulingStore


router = APIRouter(tags=["calendar"])


@router.get("/calendar", response_model=CalendarResponse)
async def list_calendar(
    interviewer_id: Optional[str] = Query(None, alias="interviewerId"),
    from_time: Optional[datetime] = Query(None, alias="from"),
    to_time: Optional[datetime] = Query(None, alias="to"),
    store: SchedulingStore = Depends(get_store),
):
    """List booked interviews on an interviewer's slots."""
    if not interviewer_id:
        raise InvalidInputError("interviewerId is required")

    entries = store.list_calendar(interviewer_id, from_time=from_time, to_time=to_time)
    return CalendarResponse(calendar=entries)
