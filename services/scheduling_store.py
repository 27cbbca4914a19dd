"""
Scheduling store for interview slots and bookings.
Handles slot publication, booking, rescheduling, cancellation, calendar queries and audit logging.
"""
import logging
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional, Tuple

from core.providers import Clock, IdGenerator, SystemClock, UUIDGenerator
from core.utils_datetime import TimestampInput, parse_timestamp
from domain.enums import AuditAction, BookingStatus, SlotStatus
from domain.errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    OverlapError,
    SchedulingError,
    TwoDayLimitError,
)
from domain.models import (
    AuditLogEntry,
    Booking,
    CalendarEntry,
    Candidate,
    PeopleDirectory,
    Slot,
    StoreSnapshot,
)
from services.constraints import (
    DEFAULT_WEEKLY_DAY_LIMIT,
    exceeds_weekly_day_limit,
    find_overlapping_slot,
)
from services.seed import CANDIDATES, COORDINATORS, INTERVIEWERS, build_seed_schedule


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduleState:
    """Immutable pair of collections; replaced as a whole on every write."""
    slots: Tuple[Slot, ...] = ()
    bookings: Tuple[Booking, ...] = ()

    def find_slot(self, slot_id: str) -> Optional[Slot]:
        return next((slot for slot in self.slots if slot.id == slot_id), None)

    def find_booking(self, booking_id: str) -> Optional[Booking]:
        return next((booking for booking in self.bookings if booking.id == booking_id), None)

    def replace_slots(self, *updated: Slot) -> "ScheduleState":
        by_id = {slot.id: slot for slot in updated}
        return ScheduleState(
            slots=tuple(by_id.get(slot.id, slot) for slot in self.slots),
            bookings=self.bookings,
        )

    def replace_booking(self, updated: Booking) -> "ScheduleState":
        return ScheduleState(
            slots=self.slots,
            bookings=tuple(updated if b.id == updated.id else b for b in self.bookings),
        )


def _in_range(start: datetime, from_time: Optional[datetime], to_time: Optional[datetime]) -> bool:
    if from_time and start < from_time:
        return False
    if to_time and start > to_time:
        return False
    return True


def _parse_bound(value: Optional[TimestampInput], name: str) -> Optional[datetime]:
    if value is None:
        return None
    parsed = parse_timestamp(value)
    if parsed is None:
        raise InvalidInputError(f"{name} must be a valid ISO-8601 timestamp")
    return parsed


class SchedulingStore:
    """
    In-memory store owning all slots and bookings.

    Mutations are serialized behind a single lock and publish a new
    ScheduleState; readers work on whichever state was current when they started.
    """

    AUDIT_LOG_LIMIT = 100
    AUDIT_LOG_MAX_ENTRIES = 1000

    def __init__(
        self,
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
        weekly_day_limit: int = DEFAULT_WEEKLY_DAY_LIMIT,
        seed: bool = True,
        audit_log_max_entries: int = AUDIT_LOG_MAX_ENTRIES
    ):
        """
        Initialize the SchedulingStore.

        Args:
            clock: Time source for timestamps and the seed schedule
            id_generator: Source of slot and booking IDs
            weekly_day_limit: Max distinct days per ISO week an interviewer may offer slots on
            seed: Load the seed dataset
            audit_log_max_entries: Audit entries retained; the oldest are dropped first
        """
        self.clock = clock or SystemClock()
        self.id_generator = id_generator or UUIDGenerator()
        self.weekly_day_limit = weekly_day_limit

        self._interviewers = {i.id: i for i in INTERVIEWERS}
        self._coordinators = {c.id: c for c in COORDINATORS}
        self._candidates = {c.id: c for c in CANDIDATES}

        self._lock = threading.Lock()
        self._state = ScheduleState()
        self._audit_log: Deque[AuditLogEntry] = deque(maxlen=audit_log_max_entries)

        if seed:
            self._load_seed()

    def _load_seed(self) -> None:
        slots, bookings = build_seed_schedule(self.clock.now())
        self._state = ScheduleState(slots=tuple(slots), bookings=tuple(bookings))
        logger.info(f"Loaded seed data: {len(slots)} slots, {len(bookings)} bookings")

    def _log_audit(
        self,
        action: AuditAction,
        entity_id: str,
        timestamp: datetime,
        actor_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Append an audit entry. Caller holds the lock."""
        self._audit_log.append(
            AuditLogEntry(
                timestamp=timestamp,
                action=action,
                entity_id=entity_id,
                actor_id=actor_id,
                details=details or {},
            )
        )
        logger.info(f"Audit log: {action.value} for {entity_id}")

    def _reject(self, error: SchedulingError) -> SchedulingError:
        logger.warning(f"Scheduling rejected ({error.code.value}): {error.message}")
        return error

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_people(self) -> PeopleDirectory:
        return PeopleDirectory(
            interviewers=list(self._interviewers.values()),
            coordinators=list(self._coordinators.values()),
            candidates=list(self._candidates.values()),
        )

    def get_candidate(self, candidate_id: str) -> Optional[Candidate]:
        return self._candidates.get(candidate_id)

    def list_slots(
        self,
        interviewer_id: Optional[str] = None,
        status: Optional[SlotStatus] = None,
        from_time: Optional[TimestampInput] = None,
        to_time: Optional[TimestampInput] = None
    ) -> List[Slot]:
        """
        List slots matching all provided filters.

        Args:
            interviewer_id: Filter by interviewer
            status: Filter by slot status
            from_time: Earliest slot start (inclusive)
            to_time: Latest slot start (inclusive)

        Returns:
            List of matching slots, all slots when no filter is given
        """
        start_bound = _parse_bound(from_time, "from")
        end_bound = _parse_bound(to_time, "to")
        state = self._state

        results = []
        for slot in state.slots:
            if interviewer_id and slot.interviewer_id != interviewer_id:
                continue
            if status and slot.status != status:
                continue
            if not _in_range(slot.start_time, start_bound, end_bound):
                continue
            results.append(slot)
        return results

    def get_slot(self, slot_id: str) -> Slot:
        """
        Get slot by ID.

        Raises:
            NotFoundError: If slot not found
        """
        slot = self._state.find_slot(slot_id)
        if slot is None:
            raise NotFoundError("Slot not found")
        return slot

    def get_booking(self, booking_id: str) -> Booking:
        """
        Get booking by ID.

        Raises:
            NotFoundError: If booking not found
        """
        booking = self._state.find_booking(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        return booking

    def list_calendar(
        self,
        interviewer_id: str,
        from_time: Optional[TimestampInput] = None,
        to_time: Optional[TimestampInput] = None
    ) -> List[CalendarEntry]:
        """
        List active bookings on an interviewer's slots.

        Args:
            interviewer_id: Interviewer whose calendar is listed
            from_time: Earliest slot start (inclusive)
            to_time: Latest slot start (inclusive)

        Returns:
            Calendar entries; the candidate is None when unknown
        """
        start_bound = _parse_bound(from_time, "from")
        end_bound = _parse_bound(to_time, "to")
        state = self._state

        entries = []
        for booking in state.bookings:
            if booking.status != BookingStatus.BOOKED:
                continue
            slot = state.find_slot(booking.slot_id)
            if slot is None or slot.interviewer_id != interviewer_id:
                continue
            if not _in_range(slot.start_time, start_bound, end_bound):
                continue
            entries.append(
                CalendarEntry(
                    booking=booking,
                    slot=slot,
                    candidate=self._candidates.get(booking.candidate_id),
                )
            )
        return entries

    def snapshot(self) -> StoreSnapshot:
        state = self._state
        return StoreSnapshot(slots=list(state.slots), bookings=list(state.bookings))

    def get_audit_log(
        self,
        entity_id: Optional[str] = None,
        limit: int = AUDIT_LOG_LIMIT
    ) -> List[AuditLogEntry]:
        """
        Retrieve audit log entries.

        Args:
            entity_id: Filter by slot or booking ID
            limit: Maximum number of entries to return

        Returns:
            Most recent entries, oldest first
        """
        with self._lock:
            entries = list(self._audit_log)

        if entity_id:
            entries = [entry for entry in entries if entry.entity_id == entity_id]

        return entries[-limit:] if limit > 0 else []

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_slot(
        self,
        interviewer_id: str,
        start_time: TimestampInput,
        end_time: TimestampInput,
        location: str
    ) -> Slot:
        """
        Publish a new available slot.

        Args:
            interviewer_id: Interviewer offering the slot
            start_time: Slot start (ISO-8601)
            end_time: Slot end (ISO-8601)
            location: Free-text location

        Returns:
            Created Slot

        Raises:
            InvalidInputError: If timestamps are unparseable or start >= end
            OverlapError: If the interval overlaps an existing slot of the interviewer
            TwoDayLimitError: If the interviewer would exceed the weekly day limit
        """
        start = parse_timestamp(start_time)
        end = parse_timestamp(end_time)
        if start is None or end is None:
            raise self._reject(
                InvalidInputError("startTime and endTime must be valid ISO-8601 strings")
            )
        if start >= end:
            raise self._reject(InvalidInputError("startTime must be before endTime"))

        with self._lock:
            state = self._state

            conflicting = find_overlapping_slot(state.slots, interviewer_id, start, end)
            if conflicting is not None:
                raise self._reject(OverlapError(details={"slotId": conflicting.id}))

            if exceeds_weekly_day_limit(state.slots, interviewer_id, start, self.weekly_day_limit):
                raise self._reject(TwoDayLimitError(
                    f"Interviewer can only have availability on {self.weekly_day_limit} days per week"
                ))

            now = self.clock.now()
            slot = Slot(
                id=self.id_generator.new_id(),
                interviewer_id=interviewer_id,
                start_time=start,
                end_time=end,
                location=location,
                status=SlotStatus.AVAILABLE,
                created_at=now,
                updated_at=now,
            )
            self._state = ScheduleState(slots=state.slots + (slot,), bookings=state.bookings)

            self._log_audit(
                AuditAction.SLOT_CREATED,
                slot.id,
                now,
                actor_id=interviewer_id,
                details={"start_time": start.isoformat(), "end_time": end.isoformat()},
            )

        logger.info(f"Created slot {slot.id} for interviewer {interviewer_id}")
        return slot

    def book_slot(self, slot_id: str, candidate_id: str, coordinator_id: str) -> Booking:
        """
        Book a candidate into an available slot.

        Args:
            slot_id: Slot to book
            candidate_id: Candidate being scheduled
            coordinator_id: Coordinator making the booking

        Returns:
            Created Booking

        Raises:
            NotFoundError: If slot not found
            ConflictError: If the slot is not available
        """
        with self._lock:
            state = self._state
            slot = state.find_slot(slot_id)
            if slot is None:
                raise self._reject(NotFoundError("Slot not found"))
            if slot.status != SlotStatus.AVAILABLE:
                raise self._reject(ConflictError("Slot already booked"))

            now = self.clock.now()
            booking = Booking(
                id=self.id_generator.new_id(),
                slot_id=slot.id,
                candidate_id=candidate_id,
                coordinator_id=coordinator_id,
                status=BookingStatus.BOOKED,
                created_at=now,
                updated_at=now,
            )
            booked_slot = slot.model_copy(update={"status": SlotStatus.BOOKED, "updated_at": now})

            updated = state.replace_slots(booked_slot)
            self._state = ScheduleState(slots=updated.slots, bookings=state.bookings + (booking,))

            self._log_audit(
                AuditAction.BOOKING_CREATED,
                booking.id,
                now,
                actor_id=coordinator_id,
                details={"slot_id": slot.id, "candidate_id": candidate_id},
            )

        logger.info(f"Booked slot {slot_id} for candidate {candidate_id} ({booking.id})")
        return booking

    def reschedule_booking(self, booking_id: str, new_slot_id: str, coordinator_id: str) -> Booking:
        """
        Move a booking to another available slot.

        The previous slot is released when it still exists.

        Args:
            booking_id: Booking to move
            new_slot_id: Target slot
            coordinator_id: Coordinator performing the change

        Returns:
            Updated Booking

        Raises:
            NotFoundError: If booking or new slot not found
            ConflictError: If the new slot is not available or the booking is cancelled
        """
        with self._lock:
            state = self._state
            booking = state.find_booking(booking_id)
            if booking is None:
                raise self._reject(NotFoundError("Booking not found"))

            new_slot = state.find_slot(new_slot_id)
            if new_slot is None:
                raise self._reject(NotFoundError("New slot not found"))
            if new_slot.status != SlotStatus.AVAILABLE:
                raise self._reject(ConflictError("Target slot is not available"))
            if booking.status == BookingStatus.CANCELLED:
                raise self._reject(ConflictError("Cancelled bookings cannot be rescheduled"))

            previous_slot = state.find_slot(booking.slot_id)
            now = self.clock.now()

            updated_booking = booking.model_copy(update={"slot_id": new_slot.id, "updated_at": now})
            changed_slots = [new_slot.model_copy(update={"status": SlotStatus.BOOKED, "updated_at": now})]
            if previous_slot is not None:
                changed_slots.append(
                    previous_slot.model_copy(update={"status": SlotStatus.AVAILABLE, "updated_at": now})
                )

            self._state = state.replace_slots(*changed_slots).replace_booking(updated_booking)

            self._log_audit(
                AuditAction.BOOKING_RESCHEDULED,
                booking.id,
                now,
                actor_id=coordinator_id,
                details={"from_slot_id": booking.slot_id, "to_slot_id": new_slot.id},
            )

        logger.info(f"Rescheduled booking {booking_id} from {booking.slot_id} to {new_slot_id}")
        return updated_booking

    def cancel_booking(self, booking_id: str, coordinator_id: Optional[str] = None) -> Booking:
        """
        Cancel a booking and release its slot.

        Cancelling an already cancelled booking returns it unchanged.

        Args:
            booking_id: Booking to cancel
            coordinator_id: Coordinator performing the cancellation, for the audit log

        Returns:
            Cancelled Booking

        Raises:
            NotFoundError: If booking not found
        """
        with self._lock:
            state = self._state
            booking = state.find_booking(booking_id)
            if booking is None:
                raise self._reject(NotFoundError("Booking not found"))
            if booking.status == BookingStatus.CANCELLED:
                return booking

            now = self.clock.now()
            cancelled = booking.model_copy(update={"status": BookingStatus.CANCELLED, "updated_at": now})

            new_state = state.replace_booking(cancelled)
            slot = state.find_slot(booking.slot_id)
            if slot is not None:
                new_state = new_state.replace_slots(
                    slot.model_copy(update={"status": SlotStatus.AVAILABLE, "updated_at": now})
                )
            self._state = new_state

            self._log_audit(
                AuditAction.BOOKING_CANCELLED,
                booking.id,
                now,
                actor_id=coordinator_id,
                details={"slot_id": booking.slot_id},
            )

        logger.info(f"Cancelled booking {booking_id}")
        return cancelled

    def reset(self) -> None:
        """Restore the seed dataset and clear the audit log."""
        with self._lock:
            self._audit_log.clear()
            self._load_seed()
            self._log_audit(AuditAction.STORE_RESET, "store", self.clock.now())
