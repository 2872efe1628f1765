"""
Availability engine package.

Dependency order (leaves first):
1. Slot Generator (slots.py)
2. Day / Month Aggregators (calendar.py)
3. Slot re-validation (conflicts.py)
"""

from .slots import (
    SlotGenerator,
    generate_slots
)

from .calendar import (
    AvailabilityCalendar,
    LIMITED_THRESHOLD,
    aggregate_status,
    available_counts,
    get_day_availability,
    get_month_availability,
    status_by_date,
    summarize_month
)

from .conflicts import (
    SlotCheck,
    check_slot
)

__all__ = [
    # --- Slot Generation ---
    "SlotGenerator",
    "generate_slots",

    # --- Aggregation ---
    "AvailabilityCalendar",
    "LIMITED_THRESHOLD",
    "aggregate_status",
    "get_day_availability",
    "get_month_availability",

    # --- Reporting ---
    "available_counts",
    "status_by_date",
    "summarize_month",

    # --- Re-validation ---
    "SlotCheck",
    "check_slot",
]
