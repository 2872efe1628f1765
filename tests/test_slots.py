from datetime import date, datetime, timezone

from availability import SlotGenerator, generate_slots
from models import Booking, BookingStatus, ResourceDescriptor, SlotStatus
from .conftest import MONDAY


def _statuses(slots):
    return [(s.start, s.end, s.status) for s in slots]


def test_end_to_end_example(room, make_booking, now):
    slots = generate_slots(MONDAY, room, [make_booking("10:00", "11:00")], now=now)

    assert _statuses(slots) == [
        ("09:00", "10:00", SlotStatus.AVAILABLE),
        ("10:00", "11:00", SlotStatus.BOOKED),
        ("11:00", "12:00", SlotStatus.AVAILABLE),
    ]
    assert all(s.price == 50 for s in slots)


def test_accepts_iso_date_strings(room, now):
    assert generate_slots("2030-01-07", room, [], now=now) == generate_slots(MONDAY, room, [], now=now)


def test_slots_are_contiguous_and_never_overflow(now):
    resource = ResourceDescriptor(
        duration_minutes=50,
        buffer_time_minutes=20,
        operating_hours={"start": "08:15", "end": "17:00"},
        available_days=[1],
    )
    slots = generate_slots(MONDAY, resource, [], now=now)

    def minutes(label):
        h, m = map(int, label.split(":"))
        return h * 60 + m

    assert slots[0].start == "08:15"
    for prev, nxt in zip(slots, slots[1:]):
        assert minutes(prev.end) + 20 == minutes(nxt.start)
    for slot in slots:
        assert minutes(slot.end) - minutes(slot.start) == 50
        assert minutes(slot.end) <= minutes("17:00")
    # 08:15 + 70 * 7 = 16:25, whose slot would end 17:15
    assert slots[-1].start == "15:15"
    assert len(slots) == 7


def test_window_shorter_than_one_slot_yields_nothing(now):
    resource = ResourceDescriptor(
        duration_minutes=90,
        operating_hours={"start": "09:00", "end": "10:00"},
        available_days=[1],
    )
    assert generate_slots(MONDAY, resource, [], now=now) == []


def test_cancelled_booking_is_invisible(room, make_booking, now):
    cancelled = make_booking("10:00", "11:00", status=BookingStatus.CANCELLED)

    assert generate_slots(MONDAY, room, [cancelled], now=now) == generate_slots(MONDAY, room, [], now=now)


def test_every_non_cancelled_status_blocks(room, make_booking, now):
    for status in (BookingStatus.PENDING, BookingStatus.COMPLETED, BookingStatus.NO_SHOW):
        slots = generate_slots(MONDAY, room, [make_booking("09:00", "10:00", status=status)], now=now)
        assert slots[0].status is SlotStatus.BOOKED


def test_partial_overlap_marks_booked(room, make_booking, now):
    slots = generate_slots(MONDAY, room, [make_booking("09:30", "10:15")], now=now)

    assert [s.status for s in slots] == [SlotStatus.BOOKED, SlotStatus.BOOKED, SlotStatus.AVAILABLE]


def test_touching_booking_does_not_overlap(room, make_booking, now):
    # [08:00, 09:00) ends exactly where the first slot begins
    slots = generate_slots(MONDAY, room, [make_booking("08:00", "09:00")], now=now)
    assert slots[0].status is SlotStatus.AVAILABLE


def test_overlapping_bookings_are_tolerated(room, make_booking, now):
    bookings = [make_booking("10:00", "11:00"), make_booking("10:30", "11:30")]
    slots = generate_slots(MONDAY, room, bookings, now=now)

    assert [s.status for s in slots] == [SlotStatus.AVAILABLE, SlotStatus.BOOKED, SlotStatus.BOOKED]


def test_buffer_after_booking(make_booking, now):
    resource = ResourceDescriptor(
        id="room-1",
        duration_minutes=45,
        buffer_time_minutes=15,
        operating_hours={"start": "09:00", "end": "13:00"},
        available_days=[1],
    )
    slots = generate_slots(MONDAY, resource, [make_booking("10:00", "11:00")], now=now)

    assert _statuses(slots) == [
        ("09:00", "09:45", SlotStatus.AVAILABLE),
        ("10:00", "10:45", SlotStatus.BOOKED),
        ("11:00", "11:45", SlotStatus.BUFFER),
        ("12:00", "12:45", SlotStatus.AVAILABLE),
    ]


def test_slot_starting_after_buffer_is_evaluated_normally(make_booking, now):
    resource = ResourceDescriptor(
        id="room-1",
        duration_minutes=30,
        buffer_time_minutes=15,
        operating_hours={"start": "09:00", "end": "12:00"},
        available_days=[1],
    )
    slots = generate_slots(MONDAY, resource, [make_booking("10:00", "11:00")], now=now)

    assert _statuses(slots) == [
        ("09:00", "09:30", SlotStatus.AVAILABLE),
        ("09:45", "10:15", SlotStatus.BOOKED),
        ("10:30", "11:00", SlotStatus.BOOKED),
        ("11:15", "11:45", SlotStatus.AVAILABLE),
    ]


def test_past_takes_precedence(room, make_booking):
    now = datetime(2030, 1, 7, 10, 30)
    slots = generate_slots(MONDAY, room, [make_booking("09:00", "10:00")], now=now)

    # 09:00 is both past and booked; 10:00 started before now
    assert [s.status for s in slots] == [SlotStatus.PAST, SlotStatus.PAST, SlotStatus.AVAILABLE]


def test_slot_starting_exactly_now_is_not_past(room):
    slots = generate_slots(MONDAY, room, [], now=datetime(2030, 1, 7, 10, 0))
    assert [s.status for s in slots] == [SlotStatus.PAST, SlotStatus.AVAILABLE, SlotStatus.AVAILABLE]


def test_bookings_on_other_days_and_resources_are_ignored(room, make_booking, now):
    bookings = [
        make_booking("10:00", "11:00", day=date(2030, 1, 8)),
        make_booking("10:00", "11:00", resource_id="room-2"),
    ]
    slots = generate_slots(MONDAY, room, bookings, now=now)
    assert all(s.status is SlotStatus.AVAILABLE for s in slots)


def test_booking_started_previous_day_is_ignored(room, now):
    overnight = Booking(
        resource_id="room-1",
        start_time=datetime(2030, 1, 6, 23, 0),
        end_time=datetime(2030, 1, 7, 10, 0),
    )
    slots = generate_slots(MONDAY, room, [overnight], now=now)
    assert slots[0].status is SlotStatus.AVAILABLE


def test_booking_running_past_midnight_blocks_rest_of_day(now):
    resource = ResourceDescriptor(
        duration_minutes=60,
        operating_hours={"start": "20:00", "end": "24:00"},
        available_days=[1],
    )
    late = Booking(start_time=datetime(2030, 1, 7, 22, 0), end_time=datetime(2030, 1, 8, 1, 0))
    slots = generate_slots(MONDAY, resource, [late], now=now)

    assert _statuses(slots) == [
        ("20:00", "21:00", SlotStatus.AVAILABLE),
        ("21:00", "22:00", SlotStatus.AVAILABLE),
        ("22:00", "23:00", SlotStatus.BOOKED),
        ("23:00", "24:00", SlotStatus.BOOKED),
    ]


def test_instants_are_converted_to_resource_time_zone():
    resource = ResourceDescriptor(
        duration_minutes=60,
        operating_hours={"start": "09:00", "end": "12:00"},
        available_days=[1],
        timezone="America/New_York",
    )
    # 15:00 UTC is 10:00 in New York (EST, UTC-5)
    booking = Booking(
        start_time=datetime(2030, 1, 7, 15, 0, tzinfo=timezone.utc),
        end_time=datetime(2030, 1, 7, 16, 0, tzinfo=timezone.utc),
    )
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)
    slots = generate_slots(MONDAY, resource, [booking], now=now)

    assert [s.status for s in slots] == [SlotStatus.AVAILABLE, SlotStatus.BOOKED, SlotStatus.AVAILABLE]


def test_local_date_decides_which_day_a_booking_belongs_to():
    resource = ResourceDescriptor(
        duration_minutes=60,
        operating_hours={"start": "20:00", "end": "23:00"},
        available_days=[0, 1],
        timezone="America/New_York",
    )
    # 01:00 UTC on the 8th is 20:00 on the 7th in New York
    booking = Booking(
        start_time=datetime(2030, 1, 8, 1, 0, tzinfo=timezone.utc),
        end_time=datetime(2030, 1, 8, 2, 0, tzinfo=timezone.utc),
    )
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)

    monday = generate_slots(MONDAY, resource, [booking], now=now)
    tuesday = generate_slots(date(2030, 1, 8), resource, [booking], now=now)

    assert monday[0].status is SlotStatus.BOOKED
    assert all(s.status is SlotStatus.AVAILABLE for s in tuesday)


def test_aware_now_is_compared_in_resource_time():
    resource = ResourceDescriptor(
        duration_minutes=60,
        operating_hours={"start": "09:00", "end": "12:00"},
        available_days=[1],
        timezone="America/New_York",
    )
    # 15:30 UTC is 10:30 in New York
    now = datetime(2030, 1, 7, 15, 30, tzinfo=timezone.utc)
    slots = generate_slots(MONDAY, resource, [], now=now)

    assert [s.status for s in slots] == [SlotStatus.PAST, SlotStatus.PAST, SlotStatus.AVAILABLE]


def test_generation_is_repeatable_and_does_not_mutate_inputs(room, make_booking, now):
    bookings = [make_booking("10:00", "11:00"), make_booking("09:00", "10:00", status=BookingStatus.CANCELLED)]
    snapshot = list(bookings)
    generator = SlotGenerator(room, bookings)

    first = generator.generate(MONDAY, now=now)
    second = generator.generate(MONDAY, now=now)

    assert first == second
    assert bookings == snapshot


def test_generator_never_assigns_closed(room, now):
    # Saturday is not an operating day, but closed is a day-level status only
    slots = generate_slots(date(2030, 1, 5), room, [], now=now)
    assert slots and all(s.status is SlotStatus.AVAILABLE for s in slots)
