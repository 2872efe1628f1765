"""
Booking data models for the Resource Availability Engine.

Bookings are the 'Demand' side: reserved intervals that block slots.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator, ConfigDict
from pydantic.alias_generators import to_camel


class BookingStatus(str, Enum):
    """Booking lifecycle states."""
    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"


class Booking(BaseModel):
    """
    A reserved interval on a resource.
    Every status except CANCELLED blocks the slots it overlaps.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "b1",
                "resourceId": "1",
                "startTime": "2025-12-15T10:00:00Z",
                "endTime": "2025-12-15T11:00:00Z",
                "status": "confirmed"
            }
        },
    )

    id: Optional[str] = Field(default=None, description="Booking identifier")
    resource_id: Optional[str] = Field(default=None, description="Owning resource")
    start_time: datetime = Field(description="Start instant (aware) or resource wall-clock (naive)")
    end_time: datetime = Field(description="End instant (aware) or resource wall-clock (naive)")
    status: BookingStatus = Field(default=BookingStatus.CONFIRMED)

    @model_validator(mode="after")
    def validate_interval(self):
        if (self.start_time.tzinfo is None) != (self.end_time.tzinfo is None):
            raise ValueError("start_time and end_time must both be aware or both naive")
        if self.end_time <= self.start_time:
            raise ValueError("Booking end must be strictly after its start")
        return self

    @property
    def is_blocking(self) -> bool:
        """Cancelled bookings are invisible to the engine."""
        return self.status != BookingStatus.CANCELLED
