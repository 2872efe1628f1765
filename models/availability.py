"""
Availability data models for the Resource Availability Engine.

This module defines the 'Output' of the engine:
fixed-length time slots and the day-level summaries built from them.
Nothing here is persisted; every query constructs fresh instances.
"""

from datetime import date as date_type
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


class SlotStatus(str, Enum):
    """Status of a single generated slot (mutually exclusive)."""
    AVAILABLE = "available"
    BOOKED = "booked"
    BUFFER = "buffer"
    PAST = "past"
    CLOSED = "closed"


class DayStatus(str, Enum):
    """Aggregate status used for calendar colour-coding."""
    AVAILABLE = "available"
    LIMITED = "limited"
    FULL = "full"
    CLOSED = "closed"


class TimeSlot(BaseModel):
    """One bookable interval, in the resource's wall-clock time."""
    model_config = ConfigDict(frozen=True)

    start: str = Field(description="HH:mm")
    end: str = Field(description="HH:mm")
    status: SlotStatus
    price: float = Field(default=0.0, description="Copied from the resource")

    @property
    def is_available(self) -> bool:
        return self.status == SlotStatus.AVAILABLE


class DayAvailability(BaseModel):
    """
    Day-level summary: aggregate status, counts and the full slot list.
    total_slots excludes slots that are already in the past.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "date": "2025-12-15",
                "status": "available",
                "availableSlots": 2,
                "totalSlots": 3,
                "slots": [
                    {"start": "09:00", "end": "10:00", "status": "available", "price": 50},
                    {"start": "10:00", "end": "11:00", "status": "booked", "price": 50},
                    {"start": "11:00", "end": "12:00", "status": "available", "price": 50}
                ]
            }
        },
    )

    date: date_type
    status: DayStatus
    available_slots: int = Field(default=0, ge=0)
    total_slots: int = Field(default=0, ge=0)
    slots: List[TimeSlot] = Field(default_factory=list)

    def available(self) -> List[TimeSlot]:
        """Slots that can still be booked."""
        return [s for s in self.slots if s.is_available]

    def find_slot(self, start: str, end: str) -> Optional[TimeSlot]:
        """Look up a slot by its exact start/end labels."""
        for slot in self.slots:
            if slot.start == start and slot.end == end:
                return slot
        return None
