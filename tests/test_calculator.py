from collections.abc import Iterator
from datetime import date, datetime

from storefront.schemas.time_slots import TimeSlot
from storefront.services.slots import (
    available_dates_from,
    available_slots_for_date,
    candidate_dates,
)

from conftest import NOW, make_config

SUNDAY = date(2024, 1, 7)
TUESDAY = date(2024, 1, 2)


def test_closed_weekday_has_no_slots():
    config = make_config()
    assert available_slots_for_date(config, {}, SUNDAY) == []


def test_closed_weekday_ignores_order_counts():
    config = make_config(available_days=["Tuesday"])
    assert available_slots_for_date(config, {"09:00": 1}, date(2024, 1, 3)) == []
    assert len(available_slots_for_date(config, {"09:00": 1}, TUESDAY)) == 2


def test_remaining_capacity_is_max_minus_orders():
    config = make_config()
    views = available_slots_for_date(config, {"09:00": 3}, TUESDAY)

    nine = views[0]
    assert nine.start_time == "09:00"
    assert nine.order_count == 3
    assert nine.available_count == 2
    assert nine.is_available is True

    ten = views[1]
    assert ten.order_count == 0
    assert ten.available_count == 5


def test_full_slot_is_unavailable():
    config = make_config()
    views = available_slots_for_date(config, {"09:00": 5}, TUESDAY)
    assert views[0].available_count == 0
    assert views[0].is_available is False


def test_overbooked_slot_reports_negative_capacity():
    config = make_config()
    views = available_slots_for_date(config, {"09:00": 7}, TUESDAY)
    assert views[0].available_count == -2
    assert views[0].is_available is False


def test_counts_for_unknown_times_are_ignored():
    config = make_config()
    views = available_slots_for_date(config, {"11:30": 4}, TUESDAY)
    assert [v.order_count for v in views] == [0, 0]


def test_output_follows_start_time_order():
    config = make_config(time_slots=[
        TimeSlot(id="c", start_time="13:00", end_time="14:00", max_orders=1),
        TimeSlot(id="a", start_time="09:30", end_time="10:00", max_orders=1),
        TimeSlot(id="b", start_time="12:30", end_time="13:00", max_orders=9),
    ])
    views = available_slots_for_date(config, {"12:30": 8, "13:00": 1}, TUESDAY)
    assert [v.start_time for v in views] == ["09:30", "12:30", "13:00"]


def test_earliest_candidate_respects_lead_time():
    config = make_config()
    first = next(candidate_dates(config, NOW))
    assert first == date(2024, 1, 2)


def test_lead_time_zero_starts_today():
    config = make_config(lead_time=0)
    assert next(candidate_dates(config, NOW)) == date(2024, 1, 1)


def test_candidate_dates_is_lazy_and_finite():
    config = make_config()
    dates = candidate_dates(config, NOW)
    assert isinstance(dates, Iterator)
    assert len(list(dates)) == 14


def test_available_dates_drop_closed_weekdays():
    config = make_config()
    dates = list(available_dates_from(config, NOW))

    assert len(dates) == 12
    assert dates[0] == "2024-01-02"
    assert "2024-01-07" not in dates
    assert "2024-01-14" not in dates
    assert dates[-1] == "2024-01-15"


def test_available_dates_accept_plain_date():
    config = make_config(max_advance_booking_days=1)
    assert list(available_dates_from(config, date(2024, 1, 1))) == ["2024-01-02"]


def test_empty_window_yields_nothing():
    config = make_config(max_advance_booking_days=0)
    assert list(available_dates_from(config, NOW)) == []


def test_timezone_aware_now_uses_its_own_calendar_day():
    config = make_config(lead_time=0, max_advance_booking_days=1)
    late_evening = datetime.fromisoformat("2024-01-06T23:30:00-05:00")
    # Saturday in New York, even though UTC has already moved to Sunday
    assert list(available_dates_from(config, late_evening)) == ["2024-01-06"]
