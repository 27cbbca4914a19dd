"""Domain layer for the interview scheduler."""

from .enums import (
    Role,
    SlotStatus,
    BookingStatus,
    ErrorCode,
    AuditAction,
)
from .models import (
    Interviewer,
    Coordinator,
    Candidate,
    PeopleDirectory,
    Slot,
    Booking,
    CalendarEntry,
    StoreSnapshot,
    AuditLogEntry,
    CreateSlotRequest,
    BookSlotRequest,
    RescheduleRequest,
    SlotListResponse,
    CalendarResponse,
    ErrorPayload,
)
from .errors import (
    SchedulingError,
    InvalidInputError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    OverlapError,
    TwoDayLimitError,
    RateLimitedError,
    status_for_code,
)

__all__ = [
    # Enums
    "Role",
    "SlotStatus",
    "BookingStatus",
    "ErrorCode",
    "AuditAction",
    # Models
    "Interviewer",
    "Coordinator",
    "Candidate",
    "PeopleDirectory",
    "Slot",
    "Booking",
    "CalendarEntry",
    "StoreSnapshot",
    "AuditLogEntry",
    "CreateSlotRequest",
    "BookSlotRequest",
    "RescheduleRequest",
    "SlotListResponse",
    "CalendarResponse",
    "ErrorPayload",
    # Errors
    "SchedulingError",
    "InvalidInputError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "OverlapError",
    "TwoDayLimitError",
    "RateLimitedError",
    "status_for_code",
]
