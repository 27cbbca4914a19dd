"""
Conflict and constraint checks for interviewer availability.
Pure functions evaluated against the current slot collection.
"""
from datetime import date, datetime
from typing import Iterable, Optional, Set

from core.utils_datetime import get_week_key, utc_day
from domain.models import Slot


DEFAULT_WEEKLY_DAY_LIMIT = 2


def intervals_overlap(
    start_a: datetime,
    end_a: datetime,
    start_b: datetime,
    end_b: datetime
) -> bool:
    """
    Check whether two half-open intervals [start, end) intersect.

    A slot ending exactly when another begins does not overlap.
    """
    return start_a < end_b and start_b < end_a


def find_overlapping_slot(
    slots: Iterable[Slot],
    interviewer_id: str,
    start: datetime,
    end: datetime,
    exclude_slot_id: Optional[str] = None
) -> Optional[Slot]:
    """
    Find the first slot of an interviewer that overlaps the given interval.

    Args:
        slots: Slots to compare against
        interviewer_id: Interviewer whose slots are considered
        start: Start of the interval
        end: End of the interval
        exclude_slot_id: Slot ID to exclude from the check (for edits)

    Returns:
        The conflicting slot, or None
    """
    for slot in slots:
        if slot.interviewer_id != interviewer_id:
            continue
        if exclude_slot_id and slot.id == exclude_slot_id:
            continue
        if intervals_overlap(start, end, slot.start_time, slot.end_time):
            return slot
    return None


def has_overlap(
    slots: Iterable[Slot],
    interviewer_id: str,
    start: datetime,
    end: datetime,
    exclude_slot_id: Optional[str] = None
) -> bool:
    return find_overlapping_slot(slots, interviewer_id, start, end, exclude_slot_id) is not None


def days_in_week(
    slots: Iterable[Slot],
    interviewer_id: str,
    week_key: date,
    exclude_slot_id: Optional[str] = None
) -> Set[date]:
    """Distinct UTC start days of an interviewer's slots within one ISO week."""
    return {
        utc_day(slot.start_time)
        for slot in slots
        if slot.interviewer_id == interviewer_id
        and slot.id != exclude_slot_id
        and get_week_key(slot.start_time) == week_key
    }


def exceeds_weekly_day_limit(
    slots: Iterable[Slot],
    interviewer_id: str,
    start: datetime,
    max_days: int = DEFAULT_WEEKLY_DAY_LIMIT,
    exclude_slot_id: Optional[str] = None
) -> bool:
    """
    Check whether adding a slot starting at `start` would give the interviewer
    availability on more than `max_days` distinct days of that ISO week.

    Only slot start days are counted, not the full slot duration.
    """
    days = days_in_week(slots, interviewer_id, get_week_key(start), exclude_slot_id)
    days.add(utc_day(start))
    return len(days) > max_days
