"""
Data models package for the Resource Availability Engine.

This package exports the three core pillars of the data architecture:
1. Supply (ResourceDescriptor, OperatingHours)
2. Demand (Booking, BookingStatus)
3. Output (TimeSlot, DayAvailability and their statuses)
"""

from .resource import (
    DayOfWeek,
    OperatingHours,
    ResourceDescriptor
)

from .booking import (
    Booking,
    BookingStatus
)

from .availability import (
    DayAvailability,
    DayStatus,
    SlotStatus,
    TimeSlot
)

__all__ = [
    # --- Resource Models ---
    "DayOfWeek",
    "OperatingHours",
    "ResourceDescriptor",

    # --- Booking Models ---
    "Booking",
    "BookingStatus",

    # --- Output Models ---
    "DayAvailability",
    "DayStatus",
    "SlotStatus",
    "TimeSlot",
]
