from datetime import date, datetime

import pytest

from models import Booking, BookingStatus, ResourceDescriptor

# A Monday well after NOW, so nothing on it is in the past
MONDAY = date(2030, 1, 7)
SATURDAY = date(2030, 1, 5)
NOW = datetime(2025, 6, 1, 8, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def room():
    """09:00-12:00, hourly slots, no buffer, weekdays only."""
    return ResourceDescriptor(
        id="room-1",
        name="Conference Room A",
        duration_minutes=60,
        buffer_time_minutes=0,
        operating_hours={"start": "09:00", "end": "12:00"},
        available_days=[1, 2, 3, 4, 5],
        price=50,
    )


@pytest.fixture
def make_booking():
    """Factory for naive (wall-clock) bookings on MONDAY unless a day is given."""

    def _make(start, end, status=BookingStatus.CONFIRMED, day=MONDAY, resource_id="room-1", booking_id=None):
        start_h, start_m = map(int, start.split(":"))
        end_h, end_m = map(int, end.split(":"))
        return Booking(
            id=booking_id,
            resource_id=resource_id,
            start_time=datetime(day.year, day.month, day.day, start_h, start_m),
            end_time=datetime(day.year, day.month, day.day, end_h, end_m),
            status=status,
        )

    return _make
