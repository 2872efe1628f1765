"""
Slot re-validation before a booking is confirmed.

Between a user picking a slot and confirming it, someone else may book it.
The check re-runs the day view on a fresh booking snapshot and reports the
outcome together with alternatives on the same day. Read-only.
"""

import logging
from dataclasses import dataclass, field
from datetime import date as date_type, datetime
from typing import Iterable, List, Optional, Union

from models import Booking, DayStatus, ResourceDescriptor, TimeSlot
from .calendar import get_day_availability

logger = logging.getLogger(__name__)


@dataclass
class SlotCheck:
    """Outcome of re-checking a requested slot."""
    requested_start: str
    requested_end: str
    day_status: DayStatus
    slot: Optional[TimeSlot] = None
    alternatives: List[TimeSlot] = field(default_factory=list)

    @property
    def is_available(self) -> bool:
        return self.slot is not None and self.slot.is_available

    @property
    def day_closed(self) -> bool:
        return self.day_status == DayStatus.CLOSED


def check_slot(
    day: Union[date_type, str],
    start: str,
    end: str,
    resource: ResourceDescriptor,
    bookings: Iterable[Booking],
    now: Optional[datetime] = None
) -> SlotCheck:
    """
    Is the slot [start, end) on `day` still bookable against `bookings`?
    Alternatives are only listed when it is not.
    """
    availability = get_day_availability(day, resource, bookings, now=now)
    slot = availability.find_slot(start, end)

    result = SlotCheck(
        requested_start=start,
        requested_end=end,
        day_status=availability.status,
        slot=slot,
    )
    if not result.is_available:
        result.alternatives = availability.available()
        logger.info(
            "Slot %s-%s on %s no longer available (%s); %d alternatives",
            start, end, availability.date.isoformat(),
            slot.status.value if slot else "no such slot",
            len(result.alternatives)
        )
    return result
