"""
Slot Generation Logic.

This module answers the question: "Which slots does Resource X offer on Day Y,
and what state is each one in?"
It walks the operating window in fixed steps and classifies every slot against
the clock and the current booking snapshot.
"""

import logging
from dataclasses import dataclass
from datetime import date as date_type, datetime, timedelta
from typing import Iterable, List, Optional, Union

from models import Booking, ResourceDescriptor, SlotStatus, TimeSlot
from models.timeutils import (
    current_wall_clock,
    format_minutes,
    minutes_since,
    parse_day,
    to_wall_clock,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockedInterval:
    """A blocking booking, expressed in minutes from midnight of the evaluated day."""
    booking_id: Optional[str]
    start: int
    end: int


class SlotGenerator:
    """
    Produces the ordered slot sequence for a resource on a given day.
    Holds a read-only snapshot of the resource and its bookings; never mutates them.
    """

    def __init__(self, resource: ResourceDescriptor, bookings: Iterable[Booking]):
        self.resource = resource
        self.bookings = tuple(bookings)

    def generate(self, day: Union[date_type, str], now: Optional[datetime] = None) -> List[TimeSlot]:
        """
        Master generation function.
        `now` is the evaluation instant; the clock is read once if it is omitted.
        """
        day = parse_day(day)
        tz = self.resource.tzinfo
        now_wall = current_wall_clock(tz, now)

        hours = self.resource.operating_hours
        start_minutes = hours.start_minutes
        end_minutes = hours.end_minutes
        duration = self.resource.duration_minutes

        blocked = self.blocked_intervals(day)

        slots = []
        current = start_minutes
        # No partial slots: a trailing slot that would overflow closing time is dropped
        while current + duration <= end_minutes:
            slot_start = current
            slot_end = current + duration

            slots.append(TimeSlot(
                start=format_minutes(slot_start),
                end=format_minutes(slot_end),
                status=self._classify(day, slot_start, slot_end, blocked, now_wall),
                price=self.resource.price,
            ))
            current += self.resource.step_minutes

        logger.debug(
            "Generated %d slots for resource %s on %s (%d blocking bookings)",
            len(slots), self.resource.id, day.isoformat(), len(blocked)
        )
        return slots

    def blocked_intervals(self, day: date_type) -> List[BlockedInterval]:
        """
        Non-cancelled bookings whose start falls on `day` in the resource's wall clock.
        """
        tz = self.resource.tzinfo
        intervals = []

        for booking in self.bookings:
            if not booking.is_blocking:
                continue
            if self._belongs_elsewhere(booking):
                continue

            start_wall = to_wall_clock(booking.start_time, tz)
            if start_wall.date() != day:
                continue

            end_wall = to_wall_clock(booking.end_time, tz)
            intervals.append(BlockedInterval(
                booking_id=booking.id,
                start=minutes_since(day, start_wall),
                end=minutes_since(day, end_wall),
            ))
        return intervals

    def _belongs_elsewhere(self, booking: Booking) -> bool:
        """Bookings tagged with another resource id are ignored."""
        return (
            self.resource.id is not None
            and booking.resource_id is not None
            and booking.resource_id != self.resource.id
        )

    def _classify(
        self,
        day: date_type,
        slot_start: int,
        slot_end: int,
        blocked: List[BlockedInterval],
        now_wall: datetime
    ) -> SlotStatus:
        """Precedence: past > booked > buffer > available."""
        if self._is_past(day, slot_start, now_wall):
            return SlotStatus.PAST
        if self._is_booked(slot_start, slot_end, blocked):
            return SlotStatus.BOOKED
        if self._is_buffer(slot_start, blocked):
            return SlotStatus.BUFFER
        return SlotStatus.AVAILABLE

    def _is_past(self, day: date_type, slot_start: int, now_wall: datetime) -> bool:
        slot_moment = datetime.combine(day, datetime.min.time()) + timedelta(minutes=slot_start)
        return slot_moment < now_wall

    def _is_booked(self, slot_start: int, slot_end: int, blocked: List[BlockedInterval]) -> bool:
        # Half-open overlap: StartA < EndB and EndA > StartB
        return any(slot_start < b.end and slot_end > b.start for b in blocked)

    def _is_buffer(self, slot_start: int, blocked: List[BlockedInterval]) -> bool:
        buffer = self.resource.buffer_time_minutes
        return any(b.end <= slot_start < b.end + buffer for b in blocked)


def generate_slots(
    day: Union[date_type, str],
    resource: ResourceDescriptor,
    bookings: Iterable[Booking],
    now: Optional[datetime] = None
) -> List[TimeSlot]:
    """Ordered slot sequence for `resource` on `day`. See SlotGenerator."""
    return SlotGenerator(resource, bookings).generate(day, now=now)
