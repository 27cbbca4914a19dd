"""Booking, rescheduling and cancellation endpoints."""

from fastapi import APIRouter, Depends, Request

from apps.api.deps import get_rate_limiter, get_store, read_payload, request_body_schema, require_roles
from domain.enums import Role
from domain.models import BookSlotRequest, Booking, RescheduleRequest
from services.rate_limiter import RateLimiter
from services.scheduling_store import SchedulingStore


router = APIRouter(tags=["bookings"])


@router.post(
    "/book",
    response_model=Booking,
    status_code=201,
    openapi_extra=request_body_schema(BookSlotRequest),
)
async def book_slot(
    request: Request,
    role: Role = Depends(require_roles(Role.COORDINATOR)),
    store: SchedulingStore = Depends(get_store),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Book a candidate into an available slot.

    Requires the Coordinator role; rate-limited per coordinator.
    """
    payload = await read_payload(request, BookSlotRequest)
    rate_limiter.apply(payload.coordinator_id)
    return store.book_slot(
        slot_id=payload.slot_id,
        candidate_id=payload.candidate_id,
        coordinator_id=payload.coordinator_id,
    )


@router.post(
    "/reschedule",
    response_model=Booking,
    openapi_extra=request_body_schema(RescheduleRequest),
)
async def reschedule_booking(
    request: Request,
    role: Role = Depends(require_roles(Role.COORDINATOR)),
    store: SchedulingStore = Depends(get_store),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Move a booking to another available slot.

    Requires the Coordinator role; rate-limited per coordinator.
    """
    payload = await read_payload(request, RescheduleRequest)
    rate_limiter.apply(payload.coordinator_id)
    return store.reschedule_booking(
        booking_id=payload.booking_id,
        new_slot_id=payload.new_slot_id,
        coordinator_id=payload.coordinator_id,
    )


@router.delete("/booking/{booking_id}", response_model=Booking)
async def cancel_booking(
    booking_id: str,
    role: Role = Depends(require_roles(Role.COORDINATOR)),
    store: SchedulingStore = Depends(get_store),
):
    """
    Cancel a booking and release its slot.

    Requires the Coordinator role. Not rate-limited.
    """
    return store.cancel_booking(booking_id)
