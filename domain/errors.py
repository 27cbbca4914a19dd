"""Error taxonomy for scheduling operations."""

from typing import Any, Dict, Optional

from .enums import ErrorCode
from .models import ErrorPayload


class SchedulingError(Exception):
    """Base class for all user-visible scheduling failures."""

    code: ErrorCode = ErrorCode.INVALID_INPUT
    default_message: str = "Invalid request"

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_payload(self) -> ErrorPayload:
        return ErrorPayload(code=self.code.value, message=self.message, details=self.details)


class InvalidInputError(SchedulingError):
    """Raised when input fails a domain-level check."""
    code = ErrorCode.INVALID_INPUT
    default_message = "Invalid input"


class UnauthorizedError(SchedulingError):
    """Raised when no role is supplied."""
    code = ErrorCode.UNAUTHORIZED
    default_message = "X-User-Role header required"


class ForbiddenError(SchedulingError):
    """Raised when the role is not permitted for the action."""
    code = ErrorCode.FORBIDDEN
    default_message = "Role not permitted for this action"


class NotFoundError(SchedulingError):
    """Raised when a slot or booking does not exist."""
    code = ErrorCode.NOT_FOUND
    default_message = "Not found"


class ConflictError(SchedulingError):
    """Raised when a slot is not available."""
    code = ErrorCode.CONFLICT
    default_message = "Slot already booked"


class OverlapError(SchedulingError):
    """Raised when a new slot overlaps an existing one for the same interviewer."""
    code = ErrorCode.OVERLAP
    default_message = "Slot overlaps with an existing time window"


class TwoDayLimitError(SchedulingError):
    """Raised when a new slot would exceed the weekly day limit."""
    code = ErrorCode.TWO_DAY_LIMIT
    default_message = "Interviewer can only have availability on two days per week"


class RateLimitedError(SchedulingError):
    """Raised when an actor exceeds the action rate limit."""
    code = ErrorCode.RATE_LIMITED
    default_message = "Too many booking actions, please slow down"


STATUS_BY_CODE: Dict[str, int] = {
    ErrorCode.UNAUTHORIZED.value: 401,
    ErrorCode.FORBIDDEN.value: 403,
    ErrorCode.NOT_FOUND.value: 404,
    ErrorCode.CONFLICT.value: 409,
    ErrorCode.OVERLAP.value: 409,
    ErrorCode.TWO_DAY_LIMIT.value: 409,
    ErrorCode.RATE_LIMITED.value: 429,
    ErrorCode.INVALID_INPUT.value: 400,
}


def status_for_code(code: str) -> int:
    """Map an error code to its HTTP status; unknown codes map to 400."""
    return STATUS_BY_CODE.get(code, 400)
