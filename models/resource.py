"""
Resource data models for the Resource Availability Engine.

This module defines the 'Supply' side of the engine:
1. Operating hours (the daily window a resource can be booked in)
2. The resource descriptor (slot length, buffer, weekly pattern, price)
3. Conversion from the persistence layer's record format
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict
from pydantic.alias_generators import to_camel

from .timeutils import format_minutes, to_minutes


class DayOfWeek(str, Enum):
    """Weekday names as stored by the persistence layer."""
    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"

    @property
    def day_index(self) -> int:
        """0=Sunday .. 6=Saturday."""
        return list(DayOfWeek).index(self)

    @classmethod
    def from_index(cls, index: int) -> "DayOfWeek":
        return list(cls)[index]


def _day_name_to_index(name: Any) -> Any:
    """Weekday name -> index; anything unrecognised is passed through for validation to reject."""
    try:
        return DayOfWeek(str(name).lower()).day_index
    except ValueError:
        return name


class OperatingHours(BaseModel):
    """Daily wall-clock window, local to the resource."""
    start: str = Field(description="Opening time, HH:mm")
    end: str = Field(description="Closing time, HH:mm (24:00 allowed)")

    @field_validator("start", "end", mode="before")
    @classmethod
    def normalise_time(cls, v):
        """Accept HH:mm or HH:mm:ss and store HH:mm."""
        if not isinstance(v, str):
            raise ValueError("Time must be a HH:mm string")
        return format_minutes(to_minutes(v))

    @model_validator(mode="after")
    def validate_window(self):
        if self.start_minutes >= self.end_minutes:
            raise ValueError("Closing time must be strictly after opening time")
        return self

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end)


class ResourceDescriptor(BaseModel):
    """
    A bookable resource (room, equipment, venue) as seen by the availability engine.
    Read-only input; owned by the persistence layer.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "1",
                "name": "Conference Room A",
                "durationMinutes": 60,
                "bufferTimeMinutes": 15,
                "operatingHours": {"start": "09:00", "end": "18:00"},
                "availableDays": [1, 2, 3, 4, 5],
                "price": 50,
                "timezone": "Europe/London"
            }
        },
    )

    id: Optional[str] = Field(default=None, description="Resource identifier")
    name: Optional[str] = Field(default=None, description="Display name")

    # Slot Shape
    duration_minutes: int = Field(gt=0, description="Length of one bookable slot")
    buffer_time_minutes: int = Field(
        default=0,
        ge=0,
        description="Mandatory gap after each booking before the next slot may start"
    )

    # Weekly Pattern
    operating_hours: OperatingHours = Field(description="Daily operating window")
    available_days: List[Annotated[int, Field(strict=True)]] = Field(
        default_factory=list,
        description="Weekdays the resource accepts bookings (0=Sunday, 6=Saturday)"
    )

    price: float = Field(default=0.0, description="Attached verbatim to each slot")

    timezone: Optional[str] = Field(
        default=None,
        description="IANA zone of the resource; None means the host's local time"
    )

    @field_validator("available_days")
    @classmethod
    def validate_days(cls, v: List[int]) -> List[int]:
        for day in v:
            if not 0 <= day <= 6:
                raise ValueError(f"Weekday index {day} out of range (0=Sunday, 6=Saturday)")
        return sorted(set(v))

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone '{v}'")
        return v

    @property
    def tzinfo(self) -> Optional[ZoneInfo]:
        """Resource zone, or None for host local time."""
        return ZoneInfo(self.timezone) if self.timezone else None

    @property
    def step_minutes(self) -> int:
        """Cursor step between consecutive slot starts."""
        return self.duration_minutes + self.buffer_time_minutes

    def is_open_on(self, weekday: int) -> bool:
        return weekday in self.available_days

    # --- Persistence Boundary ---

    @classmethod
    def from_backend(cls, record: Dict[str, Any]) -> "ResourceDescriptor":
        """
        Build a descriptor from a stored resource record.

        The store keeps weekday names ("monday"), HH:mm:ss times in
        operatingStart/operatingEnd and a decimal price.
        """
        return cls.model_validate({
            "id": record.get("id"),
            "name": record.get("name"),
            "duration_minutes": record.get("durationMinutes"),
            "buffer_time_minutes": record.get("bufferTimeMinutes") or 0,
            "operating_hours": {
                "start": record.get("operatingStart") or "09:00",
                "end": record.get("operatingEnd") or "18:00",
            },
            "available_days": [_day_name_to_index(name) for name in record.get("availableDays", [])],
            "price": record.get("price") or 0,
            "timezone": record.get("timezone"),
        })

    def to_backend(self) -> Dict[str, Any]:
        """Inverse of from_backend: weekday names and HH:mm:00 times."""
        record: Dict[str, Any] = {
            "durationMinutes": self.duration_minutes,
            "bufferTimeMinutes": self.buffer_time_minutes,
            "operatingStart": f"{self.operating_hours.start}:00",
            "operatingEnd": f"{self.operating_hours.end}:00",
            "availableDays": [DayOfWeek.from_index(d).value for d in self.available_days],
            "price": self.price,
        }
        if self.id is not None:
            record["id"] = self.id
        if self.name is not None:
            record["name"] = self.name
        if self.timezone is not None:
            record["timezone"] = self.timezone
        return record
