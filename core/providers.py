"""Clock and identifier providers injected into the scheduling services."""
import uuid
from datetime import datetime

from typing import Protocol

from core.utils_datetime import get_current_datetime


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        ...


class IdGenerator(Protocol):
    """Source of unique identifiers."""

    def new_id(self) -> str:
        ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return get_current_datetime()


class UUIDGenerator:
    """Random UUID4 identifiers."""

    def new_id(self) -> str:
        return str(uuid.uuid4())
