"""
Day and Month Availability Aggregation.

Turns slot sequences into the calendar-level signal shown to users:
1. Day view - aggregate status (closed / full / limited / available) plus counts.
2. Month view - one day view per calendar day, in order.
3. Reporting helpers - date-keyed maps and a month summary.
"""

import logging
from collections import Counter
from datetime import date as date_type, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from models import (
    Booking,
    DayAvailability,
    DayStatus,
    ResourceDescriptor,
    SlotStatus,
)
from models.timeutils import current_wall_clock, days_in_month, parse_day, weekday_index
from .slots import SlotGenerator

logger = logging.getLogger(__name__)

# A day is 'limited' when at most this share of its remaining slots is still free
LIMITED_THRESHOLD = 0.3


def aggregate_status(available_slots: int, total_slots: int) -> DayStatus:
    """Three-tier calendar signal. The limited boundary is inclusive."""
    if total_slots == 0:
        return DayStatus.CLOSED
    if available_slots == 0:
        return DayStatus.FULL
    if available_slots <= total_slots * LIMITED_THRESHOLD:
        return DayStatus.LIMITED
    return DayStatus.AVAILABLE


class AvailabilityCalendar:
    """
    Stateless calendar service for one resource and one booking snapshot.
    Each call recomputes from scratch; nothing is cached between days.
    """

    def __init__(self, resource: ResourceDescriptor, bookings: Iterable[Booking]):
        self.resource = resource
        self.generator = SlotGenerator(resource, bookings)

    def get_day(self, day: Union[date_type, str], now: Optional[datetime] = None) -> DayAvailability:
        day = parse_day(day)

        # Closed weekday: the generator is not consulted at all
        if not self.resource.is_open_on(weekday_index(day)):
            return DayAvailability(date=day, status=DayStatus.CLOSED)

        slots = self.generator.generate(day, now=now)
        available = sum(1 for s in slots if s.status == SlotStatus.AVAILABLE)
        total = sum(1 for s in slots if s.status not in (SlotStatus.PAST, SlotStatus.CLOSED))
        status = aggregate_status(available, total)

        logger.debug("%s: %s (%d/%d available)", day.isoformat(), status.value, available, total)
        return DayAvailability(
            date=day,
            status=status,
            available_slots=available,
            total_slots=total,
            slots=slots,
        )

    def get_month(self, year: int, month: int, now: Optional[datetime] = None) -> List[DayAvailability]:
        """
        One DayAvailability per calendar day (month is 1-12).
        The whole month is evaluated against a single `now` instant.
        """
        count = days_in_month(year, month)
        if now is None:
            now = current_wall_clock(self.resource.tzinfo)

        days = [self.get_day(date_type(year, month, d), now=now) for d in range(1, count + 1)]
        logger.debug("Built %d-day view for %04d-%02d", len(days), year, month)
        return days


def get_day_availability(
    day: Union[date_type, str],
    resource: ResourceDescriptor,
    bookings: Iterable[Booking],
    now: Optional[datetime] = None
) -> DayAvailability:
    return AvailabilityCalendar(resource, bookings).get_day(day, now=now)


def get_month_availability(
    year: int,
    month: int,
    resource: ResourceDescriptor,
    bookings: Iterable[Booking],
    now: Optional[datetime] = None
) -> List[DayAvailability]:
    return AvailabilityCalendar(resource, bookings).get_month(year, month, now=now)


# --- Reporting Helpers (used by calendar UIs and the runner) ---

def status_by_date(days: Iterable[DayAvailability]) -> Dict[str, DayStatus]:
    """{'YYYY-MM-DD': DayStatus} for calendar colour-coding."""
    return {d.date.isoformat(): d.status for d in days}


def available_counts(days: Iterable[DayAvailability]) -> Dict[str, int]:
    """{'YYYY-MM-DD': available slot count} for calendar badges."""
    return {d.date.isoformat(): d.available_slots for d in days}


def summarize_month(days: List[DayAvailability]) -> Dict[str, Any]:
    """
    Generate summary stats for a month view.
    Utilisation is the share of non-past slots that are not available.
    """
    status_counts = Counter(d.status.value for d in days)
    available = sum(d.available_slots for d in days)
    total = sum(d.total_slots for d in days)

    open_days = [d for d in days if d.status != DayStatus.CLOSED]
    busiest = None
    if open_days:
        # Most taken slots; earliest date wins ties
        top = max(open_days, key=lambda d: (d.total_slots - d.available_slots, -d.date.toordinal()))
        if top.total_slots - top.available_slots > 0:
            busiest = (top.date.isoformat(), top.total_slots - top.available_slots)

    utilization = ((total - available) / total * 100) if total else 0.0

    return {
        "days": len(days),
        "status_counts": {s.value: status_counts.get(s.value, 0) for s in DayStatus},
        "available_slots": available,
        "total_slots": total,
        "utilization": round(utilization, 1),
        "busiest_day": busiest,
    }
