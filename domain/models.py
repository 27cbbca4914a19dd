"""Domain models using Pydantic v2 for the interview scheduler."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from core.utils_datetime import format_timestamp
from .enums import AuditAction, BookingStatus, SlotStatus


class CamelModel(BaseModel):
    """Base model exchanged with clients using camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class RecordModel(CamelModel):
    """Immutable record; changes are made with model_copy(update=...)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ============================================================================
# Reference data
# ============================================================================

class Interviewer(RecordModel):
    """Interviewer reference data."""

    id: str
    name: str


class Coordinator(RecordModel):
    """Coordinator reference data."""

    id: str
    name: str


class Candidate(RecordModel):
    """Candidate reference data."""

    id: str
    name: str
    email: str


class PeopleDirectory(RecordModel):
    """All reference data known to the store."""

    interviewers: List[Interviewer]
    coordinators: List[Coordinator]
    candidates: List[Candidate]


# ============================================================================
# Slots and bookings
# ============================================================================

class Slot(RecordModel):
    """A time window offered by an interviewer."""

    id: str
    interviewer_id: str
    start_time: datetime
    end_time: datetime
    location: str
    status: SlotStatus
    created_at: datetime
    updated_at: datetime

    @field_serializer("start_time", "end_time", "created_at", "updated_at", when_used="json")
    def serialize_timestamps(self, value: datetime) -> str:
        return format_timestamp(value)


class Booking(RecordModel):
    """Binding of a candidate to a slot."""

    id: str
    slot_id: str
    candidate_id: str
    coordinator_id: str
    status: BookingStatus
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at", when_used="json")
    def serialize_timestamps(self, value: datetime) -> str:
        return format_timestamp(value)


class CalendarEntry(RecordModel):
    """A booked interview on an interviewer's calendar."""

    booking: Booking
    slot: Slot
    candidate: Optional[Candidate] = None


class StoreSnapshot(RecordModel):
    """Consistent view of both collections."""

    slots: List[Slot]
    bookings: List[Booking]


class AuditLogEntry(RecordModel):
    """Audit log entry for a store mutation."""

    timestamp: datetime
    action: AuditAction
    entity_id: str
    actor_id: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)

    @field_serializer("timestamp", when_used="json")
    def serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)


# ============================================================================
# Requests
# ============================================================================

class CreateSlotRequest(CamelModel):
    """Payload for publishing a new slot."""

    interviewer_id: str
    start_time: str = Field(..., description="ISO-8601 timestamp")
    end_time: str = Field(..., description="ISO-8601 timestamp")
    location: str = Field(..., min_length=1)


class BookSlotRequest(CamelModel):
    """Payload for booking a candidate into a slot."""

    slot_id: str
    candidate_id: str
    coordinator_id: str


class RescheduleRequest(CamelModel):
    """Payload for moving a booking to another slot."""

    booking_id: str
    new_slot_id: str
    coordinator_id: str


# ============================================================================
# Responses
# ============================================================================

class SlotListResponse(CamelModel):
    slots: List[Slot]
    people: PeopleDirectory


class CalendarResponse(CamelModel):
    calendar: List[CalendarEntry]


class ErrorPayload(BaseModel):
    """Structured error returned to callers."""

    code: str
    message: str
    details: Optional[Any] = None
