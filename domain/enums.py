"""Domain enums for the interview scheduler."""

from enum import Enum


class Role(str, Enum):
    """Actor role tag supplied by the caller."""

    INTERVIEWER = "Interviewer"
    COORDINATOR = "Coordinator"


class SlotStatus(str, Enum):
    """Slot status enumeration."""

    AVAILABLE = "available"
    BOOKED = "booked"


class BookingStatus(str, Enum):
    """Booking status enumeration."""

    BOOKED = "booked"
    CANCELLED = "cancelled"


class ErrorCode(str, Enum):
    """Structured error codes returned to callers."""

    INVALID_INPUT = "invalid_input"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    OVERLAP = "overlap"
    TWO_DAY_LIMIT = "two_day_limit"
    RATE_LIMITED = "rate_limited"
    INTERNAL_ERROR = "internal_error"


class AuditAction(str, Enum):
    """Audit log action types."""

    SLOT_CREATED = "slot_created"
    BOOKING_CREATED = "booking_created"
    BOOKING_RESCHEDULED = "booking_rescheduled"
    BOOKING_CANCELLED = "booking_cancelled"
    STORE_RESET = "store_reset"
