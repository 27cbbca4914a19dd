"""Fixed seed dataset loaded on startup and on explicit reset."""
from datetime import datetime, timedelta
from typing import List, Tuple

from domain.enums import BookingStatus, SlotStatus
from domain.models import Booking, Candidate, Coordinator, Interviewer, Slot


INTERVIEWERS: Tuple[Interviewer, ...] = (
    Interviewer(id="i-1", name="Amrita Singh"),
    Interviewer(id="i-2", name="Leo Alvarez"),
    Interviewer(id="i-3", name="Priya Patel"),
)

COORDINATORS: Tuple[Coordinator, ...] = (
    Coordinator(id="c-1", name="Morgan Chen"),
    Coordinator(id="c-2", name="Jamie Kim"),
)

CANDIDATES: Tuple[Candidate, ...] = (
    Candidate(id="cand-1", name="Alex Rivers", email="alex@example.com"),
    Candidate(id="cand-2", name="Sofia Rossi", email="sofia@example.com"),
    Candidate(id="cand-3", name="Jordan Blake", email="jordan@example.com"),
)


def build_seed_schedule(now: datetime) -> Tuple[List[Slot], List[Booking]]:
    """
    Build the seed slots and bookings relative to `now`.

    Slot s-3 is pre-booked by booking b-1.
    """
    day = timedelta(days=1)
    hour = timedelta(hours=1)

    def _slot(slot_id: str, interviewer_id: str, start: datetime, location: str,
              status: SlotStatus = SlotStatus.AVAILABLE) -> Slot:
        return Slot(
            id=slot_id,
            interviewer_id=interviewer_id,
            start_time=start,
            end_time=start + hour,
            location=location,
            status=status,
            created_at=now,
            updated_at=now,
        )

    slots = [
        _slot("s-1", "i-1", now + day, "Zoom"),
        _slot("s-2", "i-2", now + 2 * day, "Onsite - HQ"),
        _slot("s-3", "i-1", now + 3 * day + 9 * hour, "Zoom", SlotStatus.BOOKED),
    ]

    bookings = [
        Booking(
            id="b-1",
            slot_id="s-3",
            candidate_id="cand-1",
            coordinator_id="c-1",
            status=BookingStatus.BOOKED,
            created_at=now,
            updated_at=now,
        )
    ]

    return slots, bookings
