# backend/storefront/services/slots/calculator.py
"""
Pickup availability calculation.

Pure functions over a TimeSlotConfig and per-slot order counts. Nothing
here reads or writes storage; capacity is recomputed from raw order
counts on every call.
"""

from collections.abc import Iterator, Mapping
from datetime import date, datetime, timedelta

from ...schemas.time_slots import WEEKDAYS, AvailableSlotView, TimeSlotConfig


def candidate_dates(config: TimeSlotConfig, now: datetime | date) -> Iterator[date]:
    """
    Yield the booking window before weekday filtering.

    Exactly max_advance_booking_days consecutive dates, starting
    lead_time days after today.
    """
    today = now.date() if isinstance(now, datetime) else now
    start = today + timedelta(days=config.lead_time)
    for offset in range(config.max_advance_booking_days):
        yield start + timedelta(days=offset)


def is_bookable_weekday(config: TimeSlotConfig, day: date) -> bool:
    return WEEKDAYS[day.weekday()] in config.available_days


def available_dates_from(config: TimeSlotConfig, now: datetime | date) -> Iterator[str]:
    """Yield ISO dates in the booking window that fall on an available weekday."""
    for day in candidate_dates(config, now):
        if is_bookable_weekday(config, day):
            yield day.isoformat()


def available_slots_for_date(
    config: TimeSlotConfig,
    order_counts: Mapping[str, int],
    target_date: date,
) -> list[AvailableSlotView]:
    """
    Annotate every configured slot with its remaining capacity on target_date.

    Returns [] when target_date falls on a weekday that is not open.
    Output order follows config.time_slots (ascending startTime).
    """
    if not is_bookable_weekday(config, target_date):
        return []

    views = []
    for slot in config.time_slots:
        order_count = order_counts.get(slot.start_time, 0)
        available_count = slot.max_orders - order_count
        views.append(AvailableSlotView(
            **slot.model_dump(),
            order_count=order_count,
            available_count=available_count,
            is_available=available_count > 0,
        ))
    return views
